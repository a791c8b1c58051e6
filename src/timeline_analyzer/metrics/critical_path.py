"""Critical-path inference by weighted interval scheduling.

The critical path is approximated as the chain of non-overlapping timed
activities with the largest total duration. Activities are flat time
ranges; the node hierarchy and dependency edges are not consulted.
"""

from __future__ import annotations

from bisect import bisect_right

from timeline_analyzer.logging_config import get_logger
from timeline_analyzer.models.metrics import CriticalPathResult, TimedActivity

__all__ = [
    "CRITICAL_PATH_EXPLANATION",
    "NO_CRITICAL_PATH_EXPLANATION",
    "compute_critical_path",
]

logger = get_logger(__name__)

CRITICAL_PATH_EXPLANATION = (
    "Critical path is inferred as the longest non-overlapping chain of timed "
    "execution records."
)
NO_CRITICAL_PATH_EXPLANATION = "No timed records were available for critical-path inference."


def compute_critical_path(activities: list[TimedActivity]) -> CriticalPathResult:
    """Select the maximum-duration set of non-overlapping activities.

    Activities are sorted by finish (then start). For each activity the
    last earlier activity finishing no later than its start is found by
    binary search, and ``best[i] = max(best[i-1], duration_i +
    best[p(i)+1])`` is filled in. Ties favor including the activity.

    Args:
        activities: Timed activities with positive durations.

    Returns:
        Chosen activity ids in chronological order with their summed
        duration. An empty input yields an empty path and a distinct
        explanation.

    """
    if not activities:
        return CriticalPathResult(
            node_ids=[],
            duration_ms=0,
            explanation=NO_CRITICAL_PATH_EXPLANATION,
        )

    ordered = sorted(activities, key=lambda activity: (activity.finish_ms, activity.start_ms))
    finish_times = [activity.finish_ms for activity in ordered]

    # predecessors[i] is the index of the last activity before i finishing by its start, or -1
    predecessors = [
        bisect_right(finish_times, activity.start_ms, 0, index) - 1
        for index, activity in enumerate(ordered)
    ]

    count = len(ordered)
    best = [0] * (count + 1)
    chosen = [False] * (count + 1)

    for index in range(1, count + 1):
        activity = ordered[index - 1]
        include_value = activity.duration_ms + best[predecessors[index - 1] + 1]
        exclude_value = best[index - 1]
        if include_value >= exclude_value:
            best[index] = include_value
            chosen[index] = True
        else:
            best[index] = exclude_value

    path_ids: list[str] = []
    index = count
    while index > 0:
        if chosen[index]:
            path_ids.append(ordered[index - 1].id)
            index = predecessors[index - 1] + 1
        else:
            index -= 1
    path_ids.reverse()

    logger.debug(
        "critical_path_computed",
        activity_count=count,
        path_length=len(path_ids),
        duration_ms=best[count],
    )

    return CriticalPathResult(
        node_ids=path_ids,
        duration_ms=best[count],
        explanation=CRITICAL_PATH_EXPLANATION,
    )
