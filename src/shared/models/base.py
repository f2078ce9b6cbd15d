"""Base model configuration for all Pydantic models."""

from pydantic import BaseModel, ConfigDict


class SyncBaseModel(BaseModel):
    """Base model with common configuration.

    Conventions:
    - Field names are lowercase snake_case in Python
    - Wire names (camelCase, kebab-case) are declared as aliases
    - Unknown fields from external documents are ignored
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        extra="ignore",
    )
