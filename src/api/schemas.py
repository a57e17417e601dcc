"""
Shared HTTP payload base classes.

Bodies travel in camelCase; Python attributes stay snake_case.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(CamelModel):
    success: bool = True


class MessageResponse(SuccessResponse):
    message: str
