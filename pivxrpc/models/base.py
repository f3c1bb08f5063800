"""Shared pydantic base and scalar aliases for node response models.

Field conventions used by every model in this package:

- ``Amount`` fields are ``Decimal``; the client parses JSON fractions straight
  into ``Decimal`` so nothing is rounded on the way in.
- ``Count`` fields are strict integers: a JSON fraction, string or boolean is
  rejected rather than truncated or coerced.
- A field typed ``X | None = None`` is optional because some node versions or
  states omit it; absence always decodes to ``None``. Any other default is
  written next to the field.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Strict

Amount = Decimal
Count = Annotated[int, Strict()]
Text = Annotated[str, Strict()]
Flag = Annotated[bool, Strict()]


class NodeModel(BaseModel):
    """Base for every decoded node payload."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class ArgumentModel(BaseModel):
    """Base for structured arguments sent to the node."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_param(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
