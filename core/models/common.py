# =============================================================================
# core/models/common.py - Shared Schema Helpers
# =============================================================================
# Rows come back from Postgres in snake_case; the API speaks camelCase.
# Every schema in this package inherits from CamelModel so that:
# - responses serialize with camelCase keys
# - request bodies accept either camelCase or snake_case keys
# =============================================================================

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class PatchModel(CamelModel):
    """
    Base for partial updates.

    Every field may be omitted. Fields named in `non_nullable` back NOT NULL
    columns, so sending them as an explicit null is a validation error.
    """

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        nulls = [
            name for name in self.non_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self


def require_text(value: str | None, field: str = "value") -> str | None:
    """
    Strip a text field and reject blank strings.

    None passes through so the helper can back optional update fields.
    """
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field} must not be blank")
    return stripped
