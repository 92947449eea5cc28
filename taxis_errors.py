#!/usr/bin/env python3
"""
Error types shared by the Taxis modules.

Per-file errors (unresolved paths, transfer failures) are caught by the batch
coordinator and logged. ConfigurationError is fatal at startup.
"""

import pathlib
from typing import Optional


class TaxisError(Exception):
    """Base error for Taxis"""


class ConfigurationError(TaxisError):
    """Invalid or unreadable configuration, raised before any file is touched"""


class UnresolvedPathError(TaxisError):
    """No strategy could derive a destination for a file"""

    def __init__(self, path: pathlib.Path):
        super().__init__(f"could not derive a destination for {path}")
        self.path = path


class TransferError(TaxisError):
    """Copy or move of a single file failed"""

    def __init__(self, source: pathlib.Path, target: pathlib.Path, cause: Optional[OSError] = None):
        message = f"{source} -> {target}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.source = source
        self.target = target
        self.cause = cause
