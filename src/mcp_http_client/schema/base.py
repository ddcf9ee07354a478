"""Common pydantic base for protocol message models."""

from __future__ import annotations

import typing as t

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import SchemaError

JSON = t.Dict[str, t.Any]


def describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "; ".join(parts)


class SchemaModel(BaseModel):
    """Frozen message model that reports bad input as ``SchemaError``.

    Fields are snake_case with camelCase wire aliases. Either spelling is
    accepted on input; ``to_dict()`` writes the wire names and leaves out
    optional fields that are unset.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def __init__(self, **data: t.Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise SchemaError(describe_validation_error(exc)) from exc

    @classmethod
    def from_dict(cls, data: t.Any):
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise SchemaError(describe_validation_error(exc)) from exc

    def to_dict(self) -> JSON:
        return self.model_dump(by_alias=True, exclude_none=True)

    @property
    def extra(self) -> JSON:
        """Fields the model does not declare, kept for models that allow them."""
        return dict(self.model_extra or {})
