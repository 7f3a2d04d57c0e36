"""Reader for the IANA Language Subtag Registry.

The registry is a record-jar text file: records of ``Field: value`` lines
separated by ``%%``, where lines starting with whitespace continue the
previous field. The first record only carries the ``File-Date``.

References:
- Registry file: `https://www.iana.org/assignments/language-subtag-registry/language-subtag-registry`
- Format: RFC 5646, section 3.1
"""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from langtag import log
from langtag.errors import LanguageTagErrorMessages, RegistryFormatError
from langtag.registry.base import Category, RegistryEntry, as_category

RECORD_SEPARATOR = "%%"
KEY_FIELDS = ("Subtag", "Tag")
LIST_FIELDS = ("Prefix", "Description", "Comments")


def _iter_records(lines: Iterable[str]) -> Iterator[tuple[int, dict[str, Any]]]:
    """Yield (line number, record) pairs with continuation lines folded."""
    record: dict[str, Any] = {}
    start = 1
    last_field: str | None = None

    for number, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")
        if line == RECORD_SEPARATOR:
            if record:
                yield start, record
            record, last_field, start = {}, None, number + 1
            continue
        if not line.strip():
            continue

        if line[0].isspace():
            if last_field is None:
                raise RegistryFormatError(
                    f"{LanguageTagErrorMessages.MALFORMED_RECORD} at line {number}: continuation without field"
                )
            continued = line.strip()
            if last_field in LIST_FIELDS:
                record[last_field][-1] = f"{record[last_field][-1]} {continued}"
            else:
                record[last_field] = f"{record[last_field]} {continued}"
            continue

        field, separator, value = line.partition(":")
        if not separator:
            raise RegistryFormatError(f"{LanguageTagErrorMessages.MALFORMED_RECORD} at line {number}: '{line}'")
        field, value = field.strip(), value.strip()
        if field in LIST_FIELDS:
            record.setdefault(field, []).append(value)
        else:
            record[field] = value
        last_field = field

    if record:
        yield start, record


class IanaRegistry:
    """In-memory registry built from the IANA Language Subtag Registry.

    Records are indexed by their ``Type`` and lowercased ``Subtag``/``Tag``.
    Range records such as ``qaa..qtz`` are not indexed.

    Args:
        entries: Mapping of record type to lowercased key to entry
        file_date: The ``File-Date`` of the registry file, if known
    """

    def __init__(self, entries: dict[str, dict[str, RegistryEntry]], file_date: str | None = None) -> None:
        self.entries = entries
        self.file_date = file_date

    def lookup(self, category: Category | str, subtag: str) -> RegistryEntry | None:
        return self.entries.get(as_category(category).value, {}).get(subtag.lower())

    def __len__(self) -> int:
        return sum(len(records) for records in self.entries.values())


def read_registry(lines: Iterable[str], logger: logging.Logger | None = None) -> IanaRegistry:
    """Build a registry from the lines of an IANA registry file.

    Args:
        lines: Lines of the registry file
        logger: Diagnostic sink, defaults to the package logger

    Returns:
        The populated registry

    Raises:
        RegistryFormatError: If a line or record is malformed
    """
    logger = logger or log
    entries: dict[str, dict[str, RegistryEntry]] = {}
    file_date: str | None = None
    skipped = 0

    for start, record in _iter_records(lines):
        if "File-Date" in record and "Type" not in record:
            file_date = record["File-Date"]
            continue

        key = next((record[field] for field in KEY_FIELDS if field in record), None)
        if "Type" not in record or key is None:
            raise RegistryFormatError(
                f"{LanguageTagErrorMessages.MALFORMED_RECORD} starting at line {start}: missing Type or Subtag/Tag"
            )
        if ".." in key:
            skipped += 1
            continue

        entry = RegistryEntry.model_validate(record)
        entries.setdefault(entry.type, {})[key.lower()] = entry

    logger.debug(
        "Read %d registry records (file date %s), skipped %d ranges",
        sum(len(records) for records in entries.values()),
        file_date,
        skipped,
    )
    return IanaRegistry(entries, file_date)


def load_registry(path: Path, logger: logging.Logger | None = None) -> IanaRegistry:
    """Load an IANA registry file from disk.

    Raises:
        OSError: If the file cannot be read
        RegistryFormatError: If the file content is malformed
    """
    logger = logger or log
    with path.open("r", encoding="utf-8") as f:
        registry = read_registry(f, logger)
    logger.debug("Loaded subtag registry from %s", path)
    return registry
