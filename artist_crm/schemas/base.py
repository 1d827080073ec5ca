"""Schema Base — camelCase wire format, shared field types, partial-update guard.

Invariants:
    - Wire keys are camelCase; input accepts camelCase or snake_case
    - Strings are stripped; NonEmptyStr rejects blank values
    - Datetimes without offset are taken as UTC
    - Enum fields hold the plain value (what the String columns store)
    - Update schemas apply only fields present in the body; explicit null on a
      non-nullable column is rejected
"""

from datetime import datetime, timezone
from typing import Annotated, ClassVar

from pydantic import (
    AfterValidator, BaseModel, ConfigDict, StringConstraints, model_validator,
)
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Email = Annotated[str, StringConstraints(strip_whitespace=True, pattern=EMAIL_PATTERN)]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    """Base for every request/response body."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        validate_default=True,
    )


class ResponseModel(CamelModel):
    """Response bodies are built straight from ORM rows."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialUpdate(CamelModel):
    """PATCH body: every field optional, only fields sent are applied."""

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_on_required(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict:
        """Fields explicitly sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)
