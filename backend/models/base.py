"""Shared pydantic base for API-facing records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Immutable record serialized with camelCase keys.

    The dashboard front end reads the provider's camelCase naming, so every
    record leaving the API keeps it.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
