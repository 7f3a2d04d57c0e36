from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field

from langtag import log
from langtag.canonicalize import ExtensionOrder


class LangTagConfig(BaseModel):
    """Defaults for the command line interface.

    Args:
        registry_path: IANA subtag registry file; the minimal registry is used when unset
        extlang_form: Canonicalize to extlang form by default
        extension_order: Ordering of extension singletons
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    registry_path: Path | None = Field(None, alias="registry-path")
    extlang_form: bool = Field(False, alias="extlang-form")
    extension_order: ExtensionOrder = Field(ExtensionOrder.APPEARANCE, alias="extension-order")


def load_config(config_path: Path | None) -> LangTagConfig:
    """
    Load and validate a langtag configuration from a YAML file.

    A relative ``registry-path`` is resolved against the directory of the
    configuration file.

    Args:
        config_path: Path to the YAML configuration file, or None for defaults.

    Returns:
        A validated LangTagConfig.

    Raises:
        OSError: If the file cannot be read.
        yaml.YAMLError: If the file is not valid YAML.
        TypeError: If the YAML root is not a mapping.
        ValidationError: If validation against LangTagConfig fails.
    """
    if config_path is None:
        log.debug("No config provided, using defaults")
        return LangTagConfig()

    raw: Any
    with config_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    log.debug("Loaded config from %s", config_path)

    # Treat empty file or explicit YAML null as "defaults"
    if raw is None or raw == {}:
        return LangTagConfig()

    if not isinstance(raw, dict):
        raise TypeError(f"Config root must be a mapping (YAML object), got {type(raw).__name__}")

    config = LangTagConfig.model_validate(cast(dict[str, Any], raw))
    if config.registry_path is not None and not config.registry_path.is_absolute():
        config = config.model_copy(update={"registry_path": config_path.parent / config.registry_path})
    return config
