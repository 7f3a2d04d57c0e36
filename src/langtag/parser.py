"""
Grammar parser for RFC 5646 (BCP 47) language tags.

Only the syntax is checked here; whether the subtags exist is decided by a
registry during canonicalization. Case is preserved verbatim, so
``serialize(parse(s)) == s`` holds for every well-formed ``s``.

>>> str(parse("zh-cmn-Hans-CN"))
'zh-cmn-Hans-CN'
>>> parse("az-Arab-x-AZE-derbend").extensions
{'x': ('AZE', 'derbend')}
"""

import re

from langtag.errors import FormatError, LanguageTagErrorMessages
from langtag.subtags import PRIVATE_USE_SINGLETON, SubtagSet

# Only a single extlang is accepted; the RFC allows up to three but the
# other two are permanently reserved.
_TAG_RE = re.compile(
    r"""
    (?!-)
    (?:
        (?P<language>
            [a-z]{2,8}
        )
        (?:-(?P<extlang>
            [a-z]{3}
        ))?
        (?:-(?P<script>
            [a-z]{4}
        ))?
        (?:-(?P<region>
            [a-z]{2}
            |
            [0-9]{3}
        ))?
        (?P<variants>
            (?:-
                (?:
                    [a-z0-9]{5,}
                    |
                    [0-9][a-z0-9]{3}
                )
            )*
        )
    )?
    (?P<extensions>
        (?:
            (?:^|-)
            [a-wyz0-9]
            (?:-[a-z0-9]{2,8})+
        )*
    )
    (?P<privateuse>
        (?:^|-)
        x
        (?:-[a-z0-9]{1,8})+
    )?
    """,
    re.VERBOSE | re.IGNORECASE | re.ASCII,
)


def _split_extensions(material: str, tag: str) -> dict[str, tuple[str, ...]]:
    """Group extension tokens under their singletons.

    A one character token opens a new group unless the open group is the
    private use singleton, which absorbs every remaining token.
    """
    groups: dict[str, list[str]] = {}
    seen: set[str] = set()
    singleton = ""

    for token in material.split("-"):
        if not token:
            continue
        if len(token) == 1 and singleton.lower() != PRIVATE_USE_SINGLETON:
            if token.lower() in seen:
                raise FormatError(f'{LanguageTagErrorMessages.REPEATED_SINGLETON} "{token}": {tag}')
            seen.add(token.lower())
            groups[token] = []
            singleton = token
        else:
            groups[singleton].append(token)

    return {key: tuple(values) for key, values in groups.items()}


def parse(tag: str) -> SubtagSet:
    """Parse a language tag string into a subtag set.

    Args:
        tag: Raw language tag, e.g. "de-CH-1901" or "x-whatever"

    Returns:
        The parsed subtag set with its case preserved and no deprecation state

    Raises:
        FormatError: If the string does not match the grammar, or repeats a
            variant or an extension singleton
    """
    if not tag:
        raise FormatError(LanguageTagErrorMessages.EMPTY_TAG)

    match = _TAG_RE.fullmatch(tag)
    if match is None:
        raise FormatError(f"{LanguageTagErrorMessages.ILLEGAL_FORMAT}: {tag}")

    variants = tuple(variant for variant in (match["variants"] or "").split("-") if variant)
    folded = [variant.lower() for variant in variants]
    if len(folded) != len(set(folded)):
        raise FormatError(f"{LanguageTagErrorMessages.REPEATED_VARIANT}: {tag}")

    material = (match["extensions"] or "") + (match["privateuse"] or "")

    return SubtagSet.from_fields(
        language=match["language"] or "",
        extlang=match["extlang"] or "",
        script=match["script"] or "",
        region=match["region"] or "",
        variants=variants,
        extensions=_split_extensions(material, tag),
    )


def is_well_formed(tag: str) -> bool:
    """Check whether a string is a well-formed language tag."""
    try:
        parse(tag)
    except FormatError:
        return False
    return True
