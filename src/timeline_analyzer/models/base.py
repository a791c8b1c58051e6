"""Base Pydantic schema for the project.

Provides a common base class for all Pydantic models in the
timeline-analyzer package with shared configuration.
"""

from pydantic import BaseModel, ConfigDict

__all__ = ["BaseSchema"]


class BaseSchema(BaseModel):
    """Base model for all Pydantic schemas.

    Provides common configuration for all models in the project:
    - from_attributes: Allow construction from arbitrary objects
    - populate_by_name: Accept field names as well as their JSON aliases

    String values are kept verbatim; record ids and names are compared
    exactly as they appear in the timeline document.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )
