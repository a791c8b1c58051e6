"""Timeline analyzer for CI/CD pipeline execution timelines.

Ingests a pipeline timeline document (stages, jobs and steps with start and
finish timestamps) and derives scheduling metrics, an inferred dependency
graph, a critical path, agent-wait time and parallelization statistics.
Steps can be classified into work categories with an ordered rule set.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
