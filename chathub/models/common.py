"""
Shared schema base classes.

API payloads use camelCase keys; Python code uses snake_case attributes.

Dependencies: pydantic
System role: Common API contracts
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases, populated from either form."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(BaseModel):
    success: bool = True
