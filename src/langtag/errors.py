"""Exception hierarchy for language tag parsing and canonicalization."""


class LanguageTagError(ValueError):
    """Base class for every error raised for an unusable language tag."""


class FormatError(LanguageTagError):
    """Raised when a tag does not match the RFC 5646 grammar.

    This covers strings that do not parse, repeated variants, repeated
    extension singletons and invalid fields passed to the structured
    construction interface. No partial tag is ever produced.
    """


class DomainError(LanguageTagError):
    """Raised when canonicalization cannot resolve a subtag against the registry.

    Args:
        message: Human readable error message
        category: Registry category of the offending subtag
        subtag: The offending subtag value
    """

    def __init__(self, message: str, category: str = "", subtag: str = "") -> None:
        super().__init__(message)
        self.category = category
        self.subtag = subtag


class RegistryFormatError(LanguageTagError):
    """Raised when a subtag registry file contains a malformed record."""


class UsageError(RuntimeError):
    """Raised when an API is used out of order, e.g. querying deprecation before canonicalization."""


class LanguageTagErrorMessages:
    """Standard error messages for language tag exceptions."""

    EMPTY_TAG = "Language tag cannot be empty"
    ILLEGAL_FORMAT = "illegal language tag format"
    REPEATED_VARIANT = "illegal language tag with repeated variant"
    REPEATED_SINGLETON = "illegal language tag with repeated singleton"
    ILLEGAL_SINGLETON = "illegal language tag with non-singleton/alphanumeric extension key"
    ILLEGAL_FIELD = "illegal value for subtag field"
    UNKNOWN_SUBTAG = "illegal subtag not in registry"
    NO_VALID_PREFIX = "no valid prefix for subtag"
    NOT_CANONICALIZED = "deprecation state is only available after canonicalization"
    MALFORMED_RECORD = "malformed registry record"
