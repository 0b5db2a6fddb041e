"""Shared schema base classes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictSchemaModel(BaseModel):
    """Base model with strict validation defaults and camelCase aliases."""

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        frozen=False,
        alias_generator=to_camel,
        populate_by_name=True,
    )
