"""Shared schema building blocks."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model whose JSON keys are camelCase.

    Python code uses snake_case attribute names; FastAPI serializes
    response models by alias.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(CamelModel):
    """Success envelope without data."""

    success: bool = Field(default=True, description="Always true on success")
    message: str = Field(..., description="Human-readable outcome")
