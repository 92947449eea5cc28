#!/usr/bin/env python3
"""
Configuration for Taxis

A single immutable TaxisConfig is built from the command line at startup and
handed to every component. Validation failures raise ConfigurationError
before any file is touched.
"""

import argparse
import pathlib
from dataclasses import dataclass, field
from typing import Mapping, Optional

from device_aliases import DEFAULT_DEVICE_ALIASES, build_alias_map
from file_operations import OperationType
from taxis_errors import ConfigurationError


@dataclass(frozen=True)
class TaxisConfig:
    """Run configuration, read-only after startup"""

    source: pathlib.Path
    destination: pathlib.Path
    mode: OperationType
    dry_run: bool = False
    no_skip: bool = False
    overwrite: bool = False
    yes: bool = False
    together: bool = False
    verbose: bool = False
    aliases: Mapping[str, str] = field(default_factory=lambda: DEFAULT_DEVICE_ALIASES)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "TaxisConfig":
        """Validate parsed arguments and build the configuration

        Raises:
            ConfigurationError: On a missing source, destination or mode, an
                invalid mode or an unreadable alias file
        """
        if not args.source:
            raise ConfigurationError("A source directory is required")
        if not args.dest:
            raise ConfigurationError("A destination directory is required")

        source = pathlib.Path(args.source).expanduser()
        if not source.exists():
            raise ConfigurationError(f"Source does not exist: {source}")
        if not source.is_dir():
            raise ConfigurationError(f"Source is not a directory: {source}")

        destination = pathlib.Path(args.dest).expanduser()
        if destination.exists() and not destination.is_dir():
            raise ConfigurationError(f"Destination is not a directory: {destination}")

        alias_file: Optional[pathlib.Path] = None
        if getattr(args, "aliases", None):
            alias_file = pathlib.Path(args.aliases).expanduser()

        return cls(
            source=source,
            destination=destination,
            mode=parse_mode(args.mode),
            dry_run=getattr(args, "dry_run", False),
            no_skip=getattr(args, "no_skip", False),
            overwrite=getattr(args, "overwrite", False),
            yes=getattr(args, "yes", False),
            together=getattr(args, "together", False),
            verbose=getattr(args, "verbose", False),
            aliases=build_alias_map(alias_file),
        )

    def as_display_dict(self) -> dict[str, str]:
        """Human readable settings for the configuration table"""
        display = {
            "Source": str(self.source),
            "Destination": str(self.destination),
            "Mode": self.mode.value.capitalize(),
            "Confirmation": "All at once" if self.together else "Per file",
            "Existing files": "Overwrite" if self.overwrite else ("Rename" if self.no_skip else "Skip"),
            "Dry run": "Yes" if self.dry_run else "No",
            "Assume yes": "Yes" if self.yes else "No",
        }
        if self.aliases:
            display["Device aliases"] = str(len(self.aliases))
        return display


def parse_mode(value: Optional[str]) -> OperationType:
    """Map 'copy' or 'move' to its OperationType"""
    if not value:
        raise ConfigurationError("A mode is required (copy or move)")
    try:
        return OperationType(value.strip().lower())
    except ValueError:
        raise ConfigurationError(f"Invalid mode '{value}' (expected copy or move)") from None
