#!/usr/bin/env python3
"""
Auxiliary utility functions for Taxis

Small path helpers shared by the scanner, the batch coordinator and the CLI.
"""

import pathlib
from typing import Optional


def file_extension(path: pathlib.Path) -> str:
    """Lower-cased extension without the leading dot

    Returns:
        "jpg" for IMG_1.JPG, "" for names without an extension
    """
    return path.suffix.lower().lstrip(".")


def format_path_for_display(path: str, home_path: Optional[str] = None) -> str:
    """Format file path for display by replacing home directory with ~

    Args:
        path: File path to format
        home_path: Home directory path (defaults to platform home)

    Returns:
        Path with home directory replaced by ~ if applicable
    """
    if home_path is None:
        home_path = str(pathlib.Path.home())

    if path == home_path or path.startswith(home_path.rstrip("/\\") + "/"):
        return "~" + path[len(home_path.rstrip("/\\")) :]
    return path


def relative_to_root(path: pathlib.Path, root: pathlib.Path) -> str:
    """Show path relative to root when it lies below it, else in full"""
    try:
        return str(path.relative_to(root))
    except ValueError:
        return format_path_for_display(str(path))
