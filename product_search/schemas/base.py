"""Shared schema config - camelCase on the wire, snake_case in Python."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, PlainSerializer
from pydantic.alias_generators import to_camel

# Prices are Decimal in Python, plain JSON numbers on the wire and in the index
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}
