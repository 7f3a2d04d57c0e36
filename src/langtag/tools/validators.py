import click

from langtag.errors import FormatError
from langtag.parser import parse
from langtag.registry.minimal import GRANDFATHERED

_GRANDFATHERED_TAGS = {tag.lower() for tag in GRANDFATHERED}


def validate_language_tag(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]) -> tuple[str, ...]:
    """Validate that the given strings are well-formed BCP 47 language tags.

    Grandfathered tags are accepted even where they do not match the grammar
    (e.g. "zh-min-nan").

    Args:
        ctx: Click context
        param: Click parameter
        value: The language tags to validate

    Returns:
        The validated language tags

    Raises:
        click.BadParameter: If a language tag is empty or malformed
    """
    for tag in value:
        if not tag.strip():
            raise click.BadParameter("Language tag cannot be empty")
        if tag.lower() in _GRANDFATHERED_TAGS:
            continue

        try:
            parse(tag)
        except FormatError as e:
            raise click.BadParameter(f"'{tag}' is not a well-formed BCP 47 language tag: {e}") from None

    return value
