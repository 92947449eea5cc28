#!/usr/bin/env python3
"""
Device alias lookup

Maps raw EXIF model identifiers to friendly folder names. Aliases come from
the built-in table below, overridden by an optional alias file
(TOML, YAML or JSON, a flat identifier = alias mapping).
"""

import json
import pathlib
import tomllib
from types import MappingProxyType
from typing import Mapping, Optional

# Third-party imports
import yaml

from taxis_errors import ConfigurationError

# Known devices - customize or override with --aliases
DEFAULT_DEVICE_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "2304FPN6DC": "Xiaomi13Ultra",
        "22021211RC": "RedmiK40S",
    }
)


class AliasResolver:
    """Total lookup from device identifier to alias"""

    def __init__(self, aliases: Optional[Mapping[str, str]] = None):
        self.aliases = MappingProxyType(dict(DEFAULT_DEVICE_ALIASES if aliases is None else aliases))

    def resolve(self, device_id: str) -> str:
        """Return the alias for device_id, or device_id itself when unknown"""
        return self.aliases.get(device_id, device_id)


def _parse_alias_file(path: pathlib.Path) -> object:
    suffix = path.suffix.lower()
    if suffix == ".toml":
        with path.open("rb") as f:
            return tomllib.load(f)
    if suffix in (".yaml", ".yml"):
        with path.open(encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    if suffix == ".json":
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    raise ConfigurationError(f"Unsupported alias file type '{path.suffix}' (use .toml, .yaml, .yml or .json)")


def load_alias_file(path: pathlib.Path) -> dict[str, str]:
    """Load a flat identifier -> alias mapping from file

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a flat mapping
    """
    try:
        data = _parse_alias_file(path)
    except OSError as e:
        raise ConfigurationError(f"Cannot read alias file {path}: {e}") from e
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Malformed alias file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Alias file {path} must contain a mapping")

    aliases = {}
    for device_id, alias in data.items():
        if isinstance(alias, (dict, list)) or alias is None:
            raise ConfigurationError(f"Alias for '{device_id}' in {path} must be a plain value")
        aliases[str(device_id)] = str(alias)
    return aliases


def build_alias_map(alias_file: Optional[pathlib.Path] = None) -> Mapping[str, str]:
    """Built-in aliases merged with the entries of alias_file"""
    aliases = dict(DEFAULT_DEVICE_ALIASES)
    if alias_file is not None:
        aliases.update(load_alias_file(alias_file))
    return MappingProxyType(aliases)
