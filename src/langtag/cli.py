import logging
import sys
from pathlib import Path
from typing import Any

import rich_click as click
import yaml
from pydantic import ValidationError
from rich.traceback import install

from langtag import __version__, log
from langtag.canonicalize import Canonicalizer, ExtensionOrder
from langtag.config import LangTagConfig, load_config
from langtag.errors import LanguageTagError
from langtag.registry import Category, MinimalRegistry, Registry, load_registry
from langtag.tools.validators import validate_language_tag

registry_option = click.option(
    "--registry",
    "-r",
    "registry_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="IANA language subtag registry file. Without it every subtag is accepted.",
)


json_option = click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the result as JSON",
)


tags_argument = click.argument("tags", nargs=-1, required=True, callback=validate_language_tag)


def build_registry(registry_path: Path | None) -> Registry:
    """Build the registry for a command, exiting on unreadable registry files."""
    if registry_path is None:
        log.debug("No registry file given, using the minimal registry")
        return MinimalRegistry(log)

    try:
        return load_registry(registry_path, log)
    except OSError as e:
        log.error(f"File I/O error: {e}")
        sys.exit(1)
    except LanguageTagError as e:
        log.error(f"Invalid registry: {e}")
        sys.exit(1)


@click.group(context_settings={"auto_envvar_prefix": "langtag"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with default settings",
)
@click.version_option(__version__)
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_file: Path | None, config_path: Path | None) -> None:
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)

    try:
        ctx.obj = load_config(config_path)
    except (OSError, yaml.YAMLError, TypeError, ValidationError) as e:
        log.error(f"Invalid config: {e}")
        sys.exit(1)


@click.command()
@tags_argument
@json_option
def parse(tags: tuple[str, ...], as_json: bool) -> None:
    """Parse language tags without consulting a registry."""
    canonicalizer = Canonicalizer(MinimalRegistry(log), log)
    results: dict[str, Any] = {}

    for tag in tags:
        subtag_set = canonicalizer.parse(tag)
        fields = subtag_set.to_dict()
        del fields["deprecated"]
        if as_json:
            results[tag] = fields
            continue

        log.rule(tag)
        for key, value in fields.items():
            if isinstance(value, list):
                value = ", ".join(value)
            elif isinstance(value, dict):
                value = ", ".join(f"{singleton}-{'-'.join(values)}" for singleton, values in value.items())
            if value:
                log.key_value(key, value)

    if as_json:
        log.print_dict(results)


@click.command()
@tags_argument
@registry_option
@click.option(
    "--extlang-form/--no-extlang-form",
    default=None,
    help="Prefer the macrolanguage plus extlang form, e.g. zh-cmn instead of cmn",
)
@click.option(
    "--extension-order",
    type=click.Choice([order.value for order in ExtensionOrder], case_sensitive=False),
    default=None,
    help="Order extensions alphabetically or by first appearance; private use always comes last",
)
@json_option
@click.pass_obj
def canonicalize(
    config: LangTagConfig,
    tags: tuple[str, ...],
    registry_path: Path | None,
    extlang_form: bool | None,
    extension_order: str | None,
    as_json: bool,
) -> None:
    """Convert language tags to their canonical form."""
    registry = build_registry(registry_path or config.registry_path)
    canonicalizer = Canonicalizer(
        registry,
        log,
        ExtensionOrder(extension_order.lower()) if extension_order else config.extension_order,
    )
    use_extlang_form = config.extlang_form if extlang_form is None else extlang_form

    results: dict[str, Any] = {}
    failures = 0
    for tag in tags:
        try:
            canonical = canonicalizer.canonicalize(tag, extlang_form=use_extlang_form)
        except LanguageTagError as e:
            failures += 1
            if not as_json:
                log.error(f"{tag}: {e}")
            results[tag] = {"error": str(e)}
            continue

        results[tag] = {"canonical": str(canonical), "deprecated": canonical.is_deprecated()}
        if not as_json:
            suffix = " [yellow](deprecated)[/yellow]" if canonical.is_deprecated() else ""
            log.success(f"{tag} -> [bold]{canonical}[/bold]{suffix}")

    if as_json:
        log.print_dict(results)
    elif failures:
        log.error(f"{failures} of {len(tags)} tag(s) could not be canonicalized")
    if failures:
        sys.exit(1)


@click.command()
@click.argument("category", type=click.Choice([category.value for category in Category], case_sensitive=False))
@click.argument("subtag")
@registry_option
@json_option
@click.pass_obj
def lookup(config: LangTagConfig, category: str, subtag: str, registry_path: Path | None, as_json: bool) -> None:
    """Look up a subtag (or grandfathered tag) in the registry."""
    registry = build_registry(registry_path or config.registry_path)
    entry = registry.lookup(category, subtag)
    if entry is None:
        log.error(f'Unknown {category.lower()} subtag "{subtag}"')
        sys.exit(1)

    if as_json:
        log.print_dict(entry.to_dict())
        return

    log.rule(f"{category.lower()} {subtag}")
    for key, value in entry.to_dict().items():
        log.key_value(key, ", ".join(value) if isinstance(value, list) else value)


cli.add_command(parse)
cli.add_command(canonicalize)
cli.add_command(lookup)

if __name__ == "__main__":
    cli()
