"""Subtag set data model and serializer for RFC 5646 language tags.

A `SubtagSet` holds the six subtag fields of a language tag plus the
deprecation state determined by canonicalization. Its fields cannot be
reassigned and every transformation (see `langtag.canonicalize`) returns a
new value. The extensions mapping is a plain dict and must not be modified
in place.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from langtag.errors import FormatError, LanguageTagErrorMessages, UsageError

SUBTAG_FIELDS = ("language", "extlang", "script", "region", "variants", "extensions")

PRIVATE_USE_SINGLETON = "x"

_LANGUAGE_RE = re.compile(r"[a-z]{2,8}", re.IGNORECASE | re.ASCII)
_EXTLANG_RE = re.compile(r"[a-z]{3}", re.IGNORECASE | re.ASCII)
_SCRIPT_RE = re.compile(r"[a-z]{4}", re.IGNORECASE | re.ASCII)
_REGION_RE = re.compile(r"[a-z]{2}|[0-9]{3}", re.IGNORECASE | re.ASCII)
_VARIANT_RE = re.compile(r"[a-z0-9]{5,}|[0-9][a-z0-9]{3}", re.IGNORECASE | re.ASCII)
_SINGLETON_RE = re.compile(r"[a-z0-9]", re.IGNORECASE | re.ASCII)
_EXTENSION_VALUE_RE = re.compile(r"[a-z0-9]{2,8}", re.IGNORECASE | re.ASCII)
_PRIVATE_USE_VALUE_RE = re.compile(r"[a-z0-9]{1,8}", re.IGNORECASE | re.ASCII)


def _check_field(name: str, value: str, pattern: re.Pattern[str]) -> str:
    if value and not pattern.fullmatch(value):
        raise ValueError(f"{LanguageTagErrorMessages.ILLEGAL_FIELD} '{name}': '{value}'")
    return value


class SubtagSet(BaseModel):
    """The canonical in-memory representation of a language tag.

    All fields are always present and default to empty. Invariants are
    validated on construction independently of any registry:

    - every field is well-formed for its subtag type
    - variants are pairwise distinct, case-insensitively
    - extension keys are single alphanumeric characters, pairwise distinct
      case-insensitively, each with at least one value

    Args:
        language: 2-8 letter primary language subtag
        extlang: 3 letter extended language subtag
        script: 4 letter script subtag
        region: 2 letter or 3 digit region subtag
        variants: Ordered variant subtags
        extensions: Singleton to ordered values; "x" holds private use material
        deprecated: None until canonicalization determined the deprecation state
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    language: str = ""
    extlang: str = ""
    script: str = ""
    region: str = ""
    variants: tuple[str, ...] = ()
    extensions: dict[str, tuple[str, ...]] = {}
    deprecated: bool | None = None

    @field_validator("language")
    @classmethod
    def validate_language(cls, value: str) -> str:
        return _check_field("language", value, _LANGUAGE_RE)

    @field_validator("extlang")
    @classmethod
    def validate_extlang(cls, value: str) -> str:
        return _check_field("extlang", value, _EXTLANG_RE)

    @field_validator("script")
    @classmethod
    def validate_script(cls, value: str) -> str:
        return _check_field("script", value, _SCRIPT_RE)

    @field_validator("region")
    @classmethod
    def validate_region(cls, value: str) -> str:
        return _check_field("region", value, _REGION_RE)

    @field_validator("variants")
    @classmethod
    def validate_variants(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for variant in value:
            _check_field("variants", variant, _VARIANT_RE)
        folded = [variant.lower() for variant in value]
        if len(folded) != len(set(folded)):
            raise ValueError(f"{LanguageTagErrorMessages.REPEATED_VARIANT}: {', '.join(value)}")
        return value

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, value: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        singletons = list(value)
        if any(not _SINGLETON_RE.fullmatch(singleton) for singleton in singletons):
            raise ValueError(f"{LanguageTagErrorMessages.ILLEGAL_SINGLETON}: {', '.join(singletons)}")
        if len({singleton.lower() for singleton in singletons}) != len(singletons):
            raise ValueError(f"{LanguageTagErrorMessages.REPEATED_SINGLETON}: {', '.join(singletons)}")

        for singleton, values in value.items():
            if not values:
                raise ValueError(f"{LanguageTagErrorMessages.ILLEGAL_FIELD} 'extensions': '{singleton}' has no values")
            pattern = _PRIVATE_USE_VALUE_RE if singleton.lower() == PRIVATE_USE_SINGLETON else _EXTENSION_VALUE_RE
            for item in values:
                _check_field("extensions", item, pattern)
        return dict(value)

    @model_validator(mode="after")
    def validate_primary_block(self) -> "SubtagSet":
        # extlang, script, region and variants only exist after a primary language
        if not self.language and (self.extlang or self.script or self.region or self.variants):
            raise ValueError(f"{LanguageTagErrorMessages.ILLEGAL_FIELD} 'language': primary subtags need a language")
        return self

    @classmethod
    def from_fields(cls, **fields: Any) -> "SubtagSet":
        """Build a subtag set from structured fields.

        Accepts the optional keys language, extlang, script, region, variants
        and extensions. Unspecified keys default to empty.

        Raises:
            FormatError: If a key is unknown or any invariant is violated
        """
        unknown = sorted(set(fields) - set(SUBTAG_FIELDS))
        if unknown:
            raise FormatError(f"{LanguageTagErrorMessages.ILLEGAL_FIELD}: unknown field(s) {', '.join(unknown)}")
        try:
            return cls.model_validate(fields)
        except ValidationError as e:
            raise FormatError(str(e)) from e

    def is_deprecated(self) -> bool:
        """Whether the tag or any of its primary subtags is deprecated.

        Raises:
            UsageError: If the tag has not been canonicalized yet
        """
        if self.deprecated is None:
            raise UsageError(LanguageTagErrorMessages.NOT_CANONICALIZED)
        return self.deprecated

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible rendering of the subtag fields and deprecation state."""
        return self.model_dump(mode="json")

    def __hash__(self) -> int:
        # extensions compare as a dict, so their order must not change the hash
        return hash(
            (
                self.language,
                self.extlang,
                self.script,
                self.region,
                self.variants,
                frozenset(self.extensions.items()),
                self.deprecated,
            )
        )

    def __str__(self) -> str:
        return serialize(self)


def serialize(tag: SubtagSet) -> str:
    """Render a subtag set as its hyphen separated string form.

    Fields are emitted in the order language, extlang, script, region,
    variants, then each extension as ``singleton-value1-value2`` in the
    mapping's iteration order. Empty fields are omitted.
    """
    parts = [tag.language, tag.extlang, tag.script, tag.region, "-".join(tag.variants)]
    parts.extend(f"{singleton}-{'-'.join(values)}" for singleton, values in tag.extensions.items())
    return "-".join(part for part in parts if part)
