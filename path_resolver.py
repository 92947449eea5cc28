#!/usr/bin/env python3
"""
Destination Path Resolution

Turns a media file path into a relative destination of the form
<alias>/<year>/<month>/<basename>. Strategies are tried in order and the
first one that produces a destination wins:

1. EXIF device model and capture time (alias folder included)
2. mmexport<epoch> export code in the file name
3. Timestamp embedded in the file name

Strategies 2 and 3 know nothing about the device, so their destinations
have no alias folder.
"""

import datetime
import logging
import pathlib
from dataclasses import dataclass
from typing import Optional, Sequence

from device_aliases import AliasResolver
from filename_matcher import FilenameConventionMatcher
from metadata_extractor import MetadataExtractor
from taxis_errors import UnresolvedPathError

logger = logging.getLogger("taxis")


@dataclass(frozen=True)
class ResolvedDestination:
    """Relative destination computed for a media file"""

    alias: str
    year: str
    month: str
    basename: str
    strategy: str = ""

    @classmethod
    def from_capture_time(
        cls, file_path: pathlib.Path, capture_time: datetime.datetime, alias: str = "", strategy: str = ""
    ) -> "ResolvedDestination":
        return cls(
            alias=alias,
            year=f"{capture_time.year:04d}",
            month=f"{capture_time.month:02d}",
            basename=file_path.name,
            strategy=strategy,
        )

    @property
    def relative_path(self) -> pathlib.Path:
        """alias/year/month/basename, or year/month/basename without alias"""
        parts = [self.year, self.month, self.basename]
        if self.alias:
            parts.insert(0, self.alias)
        return pathlib.Path(*parts)


class ExifStrategy:
    """Device alias plus capture date from EXIF"""

    name = "exif"

    def __init__(self, extractor: MetadataExtractor, alias_resolver: AliasResolver):
        self.extractor = extractor
        self.alias_resolver = alias_resolver

    def attempt(self, file_path: pathlib.Path) -> Optional[ResolvedDestination]:
        info = self.extractor.extract(file_path)
        if info is None:
            return None
        alias = self.alias_resolver.resolve(info.device_id)
        return ResolvedDestination.from_capture_time(file_path, info.capture_time, alias=alias, strategy=self.name)


class ExportCodeStrategy:
    """Capture date from an mmexport<epoch> file name"""

    name = "export-code"

    def __init__(self, matcher: FilenameConventionMatcher):
        self.matcher = matcher

    def attempt(self, file_path: pathlib.Path) -> Optional[ResolvedDestination]:
        capture_time = self.matcher.match_export(file_path)
        if capture_time is None:
            return None
        return ResolvedDestination.from_capture_time(file_path, capture_time, strategy=self.name)


class NamedTimestampStrategy:
    """Capture date from a timestamp embedded in the file name"""

    name = "filename-timestamp"

    def __init__(self, matcher: FilenameConventionMatcher):
        self.matcher = matcher

    def attempt(self, file_path: pathlib.Path) -> Optional[ResolvedDestination]:
        capture_time = self.matcher.match_timestamp(file_path)
        if capture_time is None:
            return None
        return ResolvedDestination.from_capture_time(file_path, capture_time, strategy=self.name)


class PathResolver:
    """Runs the resolution strategies in order, first success wins"""

    def __init__(self, strategies: Sequence):
        self.strategies = tuple(strategies)

    @classmethod
    def default(
        cls,
        alias_resolver: AliasResolver,
        extractor: Optional[MetadataExtractor] = None,
        matcher: Optional[FilenameConventionMatcher] = None,
    ) -> "PathResolver":
        """Standard pipeline: EXIF, then export code, then filename timestamp"""
        extractor = extractor or MetadataExtractor()
        matcher = matcher or FilenameConventionMatcher()
        return cls(
            [
                ExifStrategy(extractor, alias_resolver),
                ExportCodeStrategy(matcher),
                NamedTimestampStrategy(matcher),
            ]
        )

    def resolve(self, file_path: pathlib.Path) -> ResolvedDestination:
        """Resolve the relative destination for file_path

        Raises:
            UnresolvedPathError: If no strategy recognizes the file
        """
        for strategy in self.strategies:
            destination = strategy.attempt(file_path)
            if destination is not None:
                logger.debug("%s resolved by %s to %s", file_path, strategy.name, destination.relative_path)
                return destination
        raise UnresolvedPathError(file_path)
