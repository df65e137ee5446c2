"""Shared pydantic base schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema exchanged with clients in camelCase.

    Python code uses snake_case attributes; JSON bodies use ``userId``,
    ``courseId``, ``correctCount`` and so on.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
