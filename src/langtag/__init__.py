from langtag.logger import get_logger

__author__ = """langtag developers"""
__version__ = "0.3.0"

log = get_logger("langtag")

from langtag.canonicalize import Canonicalizer, ExtensionOrder, canonicalize  # noqa: E402
from langtag.errors import DomainError, FormatError, LanguageTagError, UsageError  # noqa: E402
from langtag.parser import parse  # noqa: E402
from langtag.subtags import SubtagSet, serialize  # noqa: E402

__all__ = [
    "Canonicalizer",
    "DomainError",
    "ExtensionOrder",
    "FormatError",
    "LanguageTagError",
    "SubtagSet",
    "UsageError",
    "canonicalize",
    "log",
    "parse",
    "serialize",
]
