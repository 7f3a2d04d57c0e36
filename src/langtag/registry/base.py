"""Subtag registry contract consumed by the canonicalizer."""

from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    LANGUAGE = "language"
    EXTLANG = "extlang"
    SCRIPT = "script"
    REGION = "region"
    VARIANT = "variant"
    GRANDFATHERED = "grandfathered"


class RegistryEntry(BaseModel):
    """A single record of a subtag registry.

    Field aliases are the field names of the IANA Language Subtag Registry,
    so a parsed record can be validated as is. An entry without any of the
    optional attributes still means "known subtag".

    Args:
        type: Registry category of the record
        subtag: The subtag the record describes (subtag records)
        tag: Canonical form of a whole tag (grandfathered and redundant records)
        deprecated: Whether the record is deprecated; a deprecation date counts as True
        suppress_script: Script subtag that is redundant for this language
        preferred_value: Modern replacement for the subtag or tag
        prefix: Required prefixes, in registry order
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    type: str = Field("", alias="Type")
    subtag: str | None = Field(None, alias="Subtag")
    tag: str | None = Field(None, alias="Tag")
    deprecated: bool = Field(False, alias="Deprecated")
    suppress_script: str | None = Field(None, alias="Suppress-Script")
    preferred_value: str | None = Field(None, alias="Preferred-Value")
    prefix: tuple[str, ...] = Field((), alias="Prefix")
    description: tuple[str, ...] = Field((), alias="Description")
    added: str | None = Field(None, alias="Added")
    macrolanguage: str | None = Field(None, alias="Macrolanguage")
    scope: str | None = Field(None, alias="Scope")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> str:
        return str(value.value if isinstance(value, Category) else value).lower()

    @field_validator("deprecated", mode="before")
    @classmethod
    def normalize_deprecated(cls, value: Any) -> bool:
        # The IANA registry records the deprecation date instead of a flag
        if isinstance(value, str):
            return value.strip().lower() not in ("", "false", "0", "no")
        return bool(value)

    @field_validator("preferred_value", "suppress_script", mode="before")
    @classmethod
    def empty_as_none(cls, value: Any) -> Any:
        return value or None

    def to_dict(self) -> dict[str, Any]:
        """Render the entry with its registry field names, omitting empty attributes."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return {key: value for key, value in data.items() if value != []}


@runtime_checkable
class Registry(Protocol):
    """Read-only subtag lookup service.

    Implementations must be case-insensitive on ``subtag`` and safe for
    concurrent reads.
    """

    def lookup(self, category: Category | str, subtag: str) -> RegistryEntry | None:
        """Return the entry for ``subtag`` in ``category``, or None if unknown."""
        ...


def as_category(category: Category | str) -> Category:
    """Coerce a category name into a `Category`.

    Raises:
        ValueError: If the name is not a registry category
    """
    if isinstance(category, Category):
        return category
    return Category(category.lower())
