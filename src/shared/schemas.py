"""Base schema for the public JSON contract.

The API speaks camelCase (``userId``, ``scheduledPickupTime``); Python code
stays snake_case. Input is accepted in either form.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    message: str


# Prices travel as JSON numbers but stay Decimal inside the application
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
