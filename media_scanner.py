#!/usr/bin/env python3
"""
Media File Discovery

Walks a directory tree in a stable order and sorts files into images,
videos and audio by lower-cased extension.
"""

import os
import pathlib
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Collection, Mapping, Optional

from auxiliary import file_extension
from taxis_errors import ConfigurationError


class MediaCategory(Enum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


DEFAULT_EXTENSION_CATEGORIES: Mapping[str, MediaCategory] = MappingProxyType(
    {
        **{ext: MediaCategory.IMAGE for ext in ("jpg", "jpeg", "png", "gif", "bmp")},
        **{ext: MediaCategory.VIDEO for ext in ("mp4", "mov", "avi", "wmv", "mkv", "rm", "f4v", "flv", "swf")},
        **{ext: MediaCategory.AUDIO for ext in ("mp3", "flac", "wav")},
    }
)

# Known but not collected yet
DEFAULT_DISABLED_EXTENSIONS = frozenset({"flac", "wav"})


@dataclass
class ScanResult:
    """Media files found under a root, in walk order"""

    images: list[pathlib.Path] = field(default_factory=list)
    videos: list[pathlib.Path] = field(default_factory=list)
    audio: list[pathlib.Path] = field(default_factory=list)

    def add(self, category: MediaCategory, path: pathlib.Path):
        {
            MediaCategory.IMAGE: self.images,
            MediaCategory.VIDEO: self.videos,
            MediaCategory.AUDIO: self.audio,
        }[category].append(path)


class MediaScanner:
    """Recursive media discovery driven by an extension table"""

    def __init__(
        self,
        categories: Optional[Mapping[str, MediaCategory]] = None,
        disabled: Collection[str] = DEFAULT_DISABLED_EXTENSIONS,
    ):
        self.categories = MappingProxyType(dict(DEFAULT_EXTENSION_CATEGORIES if categories is None else categories))
        self.disabled = frozenset(disabled)

    def classify(self, file_path: pathlib.Path) -> Optional[MediaCategory]:
        """Category of file_path, or None for unknown and disabled extensions"""
        ext = file_extension(file_path)
        if ext in self.disabled:
            return None
        return self.categories.get(ext)

    def scan(self, root: pathlib.Path) -> ScanResult:
        """Collect media files under root

        Raises:
            ConfigurationError: If root is not an existing directory
        """
        result = ScanResult()
        for file_path in walk_files(root):
            category = self.classify(file_path)
            if category is not None:
                result.add(category, file_path)
        return result


def walk_files(root: pathlib.Path):
    """Yield every file under root, directories and names in sorted order"""
    if not root.is_dir():
        raise ConfigurationError(f"Not a directory: {root}")

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            yield pathlib.Path(dirpath) / filename


def count_extensions(root: pathlib.Path) -> Counter:
    """Count files per lower-cased extension under root ('' for none)"""
    return Counter(file_extension(file_path) for file_path in walk_files(root))
