"""Record types for the random-quote payload.

The remote service answers with::

    {"type": "success", "value": {"id": 10, "quote": "Test quote"}}

Missing fields fall back to empty defaults, explicit ``null`` is treated the
same as a missing field, and unknown fields are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from quoteclient.errors import DecodeError


class Value(BaseModel):
    """Identifier and text of a single quotation."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int | None = None
    quote: str = ""

    @field_validator("quote", mode="before")
    @classmethod
    def _null_quote(cls, v: Any) -> Any:
        return "" if v is None else v

    def __str__(self) -> str:
        return f"Value{{id={self.id}, quote='{self.quote}'}}"


class Quote(BaseModel):
    """Envelope returned by the quote service."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = ""
    value: Value = Value()

    @field_validator("type", mode="before")
    @classmethod
    def _null_type(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("value", mode="before")
    @classmethod
    def _null_value(cls, v: Any) -> Any:
        return Value() if v is None else v

    @classmethod
    def from_dict(cls, data: Any, url: str | None = None) -> Quote:
        if not isinstance(data, dict):
            raise DecodeError(
                f"Expected a JSON object, got {type(data).__name__}", url=url
            )
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(f"Payload is not a quote: {exc}", url=url) from exc

    @classmethod
    def from_json(cls, data: str | bytes, url: str | None = None) -> Quote:
        if isinstance(data, bytes):
            try:
                data = data.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise DecodeError(f"Quote JSON is not valid UTF-8: {exc}", url=url) from exc
        try:
            return cls.model_validate_json(data)
        except ValidationError as exc:
            raise DecodeError(f"Invalid quote JSON: {exc}", url=url) from exc

    def to_json(self) -> str:
        return self.model_dump_json()

    def __str__(self) -> str:
        return f"Quote{{type='{self.type}', value={self.value}}}"
