"""Canonicalization of language tags against a subtag registry.

Implements the canonical form of RFC 5646 section 4.5: case folding,
extension ordering, per-subtag registry validation with preferred value
substitution, prefix constraints, script suppression and grandfathered tag
resolution. Optionally the result is converted to "extlang form"
(``zh-cmn`` instead of ``cmn``).
"""

import logging
from enum import Enum

from langtag import log
from langtag.errors import DomainError, LanguageTagErrorMessages
from langtag.parser import parse
from langtag.registry.base import Category, Registry, RegistryEntry
from langtag.registry.minimal import MinimalRegistry
from langtag.subtags import PRIVATE_USE_SINGLETON, SubtagSet, serialize

PRIMARY_CATEGORIES = (Category.LANGUAGE, Category.EXTLANG, Category.SCRIPT, Category.REGION)


class ExtensionOrder(str, Enum):
    SORTED = "sorted"
    APPEARANCE = "appearance"


def order_extensions(
    extensions: dict[str, tuple[str, ...]],
    order: ExtensionOrder = ExtensionOrder.APPEARANCE,
) -> dict[str, tuple[str, ...]]:
    """Reorder extensions, always placing the private use group last.

    Args:
        extensions: Extensions with lowercased singletons
        order: APPEARANCE keeps the current order of the singletons,
            SORTED orders them by ASCII value

    Returns:
        A new mapping in the requested order
    """
    singletons = list(extensions)
    if order is ExtensionOrder.SORTED:
        singletons.sort()
    # stable sort, only moves "x" to the end
    singletons.sort(key=lambda singleton: singleton == PRIVATE_USE_SINGLETON)
    return {singleton: extensions[singleton] for singleton in singletons}


def _has_prefix(current: str, prefixes: tuple[str, ...]) -> bool:
    # Prefixes are matched case-insensitively and only on whole subtags: a plain
    # startswith would let "sli-rozaj" satisfy the prefix "sl" of "rozaj".
    current = current.lower()
    for prefix in prefixes:
        prefix = prefix.lower()
        if current == prefix or current.startswith(f"{prefix}-"):
            return True
    return False


class Canonicalizer:
    """Convert language tags to their canonical form.

    Args:
        registry: Subtag registry used to resolve subtags, defaults to a
            `MinimalRegistry`
        logger: Diagnostic sink for grandfathered substitution notices
        extension_order: How extension singletons are ordered
    """

    def __init__(
        self,
        registry: Registry | None = None,
        logger: logging.Logger | None = None,
        extension_order: ExtensionOrder = ExtensionOrder.APPEARANCE,
    ) -> None:
        self.logger = logger or log
        self.registry = registry if registry is not None else MinimalRegistry(self.logger)
        self.extension_order = ExtensionOrder(extension_order)

    def parse(self, tag: str) -> SubtagSet:
        """Construct a subtag set from a string, honoring grandfathered tags.

        Grandfathered tags become a single opaque language value, so that
        irregular tags outside the grammar (e.g. "zh-min-nan") can be
        constructed. Every other string goes through the grammar parser.

        Raises:
            FormatError: If the string is not grandfathered and not well-formed
        """
        entry = self.registry.lookup(Category.GRANDFATHERED, tag) if tag else None
        if entry is not None:
            return SubtagSet.model_construct(language=entry.tag or tag)
        return parse(tag)

    def canonicalize(self, tag: SubtagSet | str, extlang_form: bool = False) -> SubtagSet:
        """Return the canonical form of a tag.

        The input is never modified. Canonicalizing a canonical tag returns
        an equal tag, unless the registry introduced new preferred values.

        Args:
            tag: Subtag set, or a string constructed with `parse`
            extlang_form: Convert extlang-as-primary languages back to
                macrolanguage plus extlang (e.g. "cmn" to "zh-cmn")

        Returns:
            The canonical subtag set with its deprecation state determined

        Raises:
            FormatError: If a string tag is not well-formed
            DomainError: If a subtag is unknown or violates its prefix constraint
        """
        if isinstance(tag, str):
            tag = self.parse(tag)
        original = serialize(tag)

        tag, finished = self._resolve_grandfathered(tag.model_copy(update={"deprecated": False}))
        if finished:
            return tag

        tag = self._fold_case(tag)

        for category in PRIMARY_CATEGORIES:
            tag, value = self._resolve_subtag(tag, category, getattr(tag, category.value))
            tag = tag.model_copy(update={category.value: value})

        variants = list(tag.variants)
        for index, variant in enumerate(tag.variants):
            tag, variants[index] = self._resolve_subtag(tag, Category.VARIANT, variant)
            tag = tag.model_copy(update={"variants": tuple(variants)})

        # a preferred value may repeat a variant that is already present
        tag = tag.model_copy(update={"variants": tuple(dict.fromkeys(tag.variants))})

        if extlang_form:
            tag = self._to_extlang_form(tag)

        self.logger.debug('canonicalized "%s" to "%s"', original, tag)
        return tag

    def _resolve_grandfathered(self, tag: SubtagSet) -> tuple[SubtagSet, bool]:
        """Resolve a whole grandfathered tag.

        Returns:
            The (possibly replaced) tag and whether canonicalization is finished
        """
        current = serialize(tag)
        entry = self.registry.lookup(Category.GRANDFATHERED, current) if current else None
        if entry is None:
            return tag, False

        if entry.preferred_value:
            self.logger.info(
                'exchange %s language tag from "%s" to "%s"',
                entry.type or Category.GRANDFATHERED.value,
                current,
                entry.preferred_value,
            )
            return parse(entry.preferred_value).model_copy(update={"deprecated": False}), False

        return SubtagSet.model_construct(language=entry.tag or current, deprecated=entry.deprecated), True

    def _fold_case(self, tag: SubtagSet) -> SubtagSet:
        extensions = {
            singleton.lower(): tuple(value.lower() for value in values) for singleton, values in tag.extensions.items()
        }
        return tag.model_copy(
            update={
                "language": tag.language.lower(),
                "extlang": tag.extlang.lower(),
                "script": tag.script.capitalize(),
                "region": tag.region.upper(),
                "variants": tuple(variant.lower() for variant in tag.variants),
                "extensions": order_extensions(extensions, self.extension_order),
            }
        )

    def _lookup(self, tag: SubtagSet, category: Category, value: str) -> RegistryEntry:
        entry = self.registry.lookup(category, value)
        if entry is None:
            raise DomainError(
                f'{LanguageTagErrorMessages.UNKNOWN_SUBTAG}: "{value}" of type "{category.value}"',
                category.value,
                value,
            )
        if entry.prefix and not _has_prefix(serialize(tag), entry.prefix):
            raise DomainError(
                f'{LanguageTagErrorMessages.NO_VALID_PREFIX}: "{value}" of type "{category.value}" '
                f"requires one of {', '.join(entry.prefix)}",
                category.value,
                value,
            )
        return entry

    def _resolve_subtag(self, tag: SubtagSet, category: Category, value: str) -> tuple[SubtagSet, str]:
        """Resolve one subtag value against the registry.

        Returns:
            The tag with any side effects applied (deprecation, language and
            extlang replacement, script suppression) and the resolved value
        """
        if not value:
            return tag, value

        entry = self._lookup(tag, category, value)

        # a preferred value takes precedence over the deprecated flag
        if entry.preferred_value:
            if category in (Category.LANGUAGE, Category.EXTLANG):
                replacement = parse(entry.preferred_value)
                tag = tag.model_copy(update={"language": replacement.language, "extlang": replacement.extlang})
                value = getattr(tag, category.value)
            else:
                value = entry.preferred_value
        elif entry.deprecated:
            tag = tag.model_copy(update={"deprecated": True})

        if (
            category is Category.LANGUAGE
            and entry.suppress_script
            and entry.suppress_script.lower() == tag.script.lower()
        ):
            tag = tag.model_copy(update={"script": ""})

        return tag, value

    def _to_extlang_form(self, tag: SubtagSet) -> SubtagSet:
        if not tag.language or tag.extlang:
            return tag
        entry = self.registry.lookup(Category.EXTLANG, tag.language)
        if entry is None or not entry.prefix:
            return tag
        return tag.model_copy(update={"extlang": tag.language, "language": entry.prefix[0]})


def canonicalize(
    tag: SubtagSet | str,
    registry: Registry | None = None,
    extlang_form: bool = False,
    logger: logging.Logger | None = None,
    extension_order: ExtensionOrder = ExtensionOrder.APPEARANCE,
) -> SubtagSet:
    """Canonicalize a tag with a one-off `Canonicalizer`.

    See `Canonicalizer.canonicalize`.
    """
    return Canonicalizer(registry, logger, extension_order).canonicalize(tag, extlang_form=extlang_form)
