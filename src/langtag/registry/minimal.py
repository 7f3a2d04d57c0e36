"""Minimal subtag registry reduced to the grandfathered tags.

Every subtag of every other category is accepted as is, which makes this
registry useful as a fallback when no IANA registry file is available:
canonicalization still folds case, orders extensions and resolves the
grandfathered tags, but it cannot detect unknown subtags.
"""

import logging

from langtag import log
from langtag.registry.base import Category, RegistryEntry, as_category

# tag -> (preferred value, deprecated)
GRANDFATHERED: dict[str, tuple[str | None, bool]] = {
    "en-GB-oed": ("en-GB-oxendict", True),
    "i-ami": ("ami", True),
    "i-bnn": ("bnn", True),
    "i-default": (None, False),
    "i-enochian": (None, True),
    "i-hak": ("hak", True),
    "i-klingon": ("tlh", True),
    "i-lux": ("lb", True),
    "i-mingo": (None, False),
    "i-navajo": ("nv", True),
    "i-pwn": ("pwn", True),
    "i-tao": ("tao", True),
    "i-tay": ("tay", True),
    "i-tsu": ("tsu", True),
    "sgn-BE-FR": ("sfb", True),
    "sgn-BE-NL": ("vgt", True),
    "sgn-CH-DE": ("sgg", True),
    "art-lojban": ("jbo", True),
    "cel-gaulish": (None, True),
    "no-bok": ("nb", True),
    "no-nyn": ("nn", True),
    "zh-guoyu": ("cmn", True),
    "zh-hakka": ("hak", True),
    "zh-min": (None, True),
    "zh-min-nan": ("nan", True),
    "zh-xiang": ("hsn", True),
}


class MinimalRegistry:
    """Registry that knows the grandfathered tags and blindly accepts everything else.

    Args:
        logger: Diagnostic sink for the notices about blindly accepted subtags
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or log
        self._grandfathered = {
            tag.lower(): RegistryEntry(
                type=Category.GRANDFATHERED,
                tag=tag,
                preferred_value=preferred_value,
                deprecated=deprecated,
            )
            for tag, (preferred_value, deprecated) in GRANDFATHERED.items()
        }

    def lookup(self, category: Category | str, subtag: str) -> RegistryEntry | None:
        category = as_category(category)
        if category is Category.GRANDFATHERED:
            return self._grandfathered.get(subtag.lower())

        self.logger.info('blindly accept subtag "%s" of type "%s"', subtag, category.value)
        return RegistryEntry(type=category, subtag=subtag)
