#!/usr/bin/env python3
"""
Filename Convention Matching

Recovers a capture time from the file name when metadata is missing:
- Export codes such as mmexport1680307200.jpg (Unix epoch seconds)
- Timestamps embedded in the name (20230401_101500.jpg, 2023-04-01 10.15.00.png)

Timestamp patterns are tried in declaration order, so a name that two
patterns could match always resolves the same way.
"""

import datetime
import pathlib
import re
from typing import Optional, Sequence, Tuple

# Third-party imports
from tzlocal import get_localzone

EXPORT_CODE_PATTERN = re.compile(r"mmexport(1\d{9})")

# (regex, strptime layout) pairs, highest priority first
DEFAULT_TIMESTAMP_PATTERNS: Tuple[Tuple[str, str], ...] = (
    (r"\d{8}_\d{6}", "%Y%m%d_%H%M%S"),
    (r"\d{4}-\d{2}-\d{2} \d{2}\.\d{2}\.\d{2}", "%Y-%m-%d %H.%M.%S"),
)


class FilenameConventionMatcher:
    """Matches known filename conventions against a file's basename"""

    def __init__(self, timestamp_patterns: Sequence[Tuple[str, str]] = DEFAULT_TIMESTAMP_PATTERNS, timezone=None):
        """Initialize matcher

        Args:
            timestamp_patterns: Ordered (regex, strptime layout) pairs
            timezone: Zone used to convert export epochs to local time
        """
        self.timezone = timezone or get_localzone()
        self.timestamp_patterns = tuple((re.compile(regex), layout) for regex, layout in timestamp_patterns)

    def match(self, file_path: pathlib.Path) -> Optional[datetime.datetime]:
        """Try the export code first, then the timestamp patterns"""
        return self.match_export(file_path) or self.match_timestamp(file_path)

    def match_export(self, file_path: pathlib.Path) -> Optional[datetime.datetime]:
        """Capture time from an mmexport<epoch> code anywhere in the name"""
        found = EXPORT_CODE_PATTERN.search(file_path.name)
        if not found:
            return None
        return datetime.datetime.fromtimestamp(int(found.group(1)), tz=self.timezone)

    def match_timestamp(self, file_path: pathlib.Path) -> Optional[datetime.datetime]:
        """Capture time from the first pattern whose match also parses"""
        name = file_path.name
        for regex, layout in self.timestamp_patterns:
            found = regex.search(name)
            if not found:
                continue
            try:
                return datetime.datetime.strptime(found.group(0), layout)
            except ValueError:
                # Looks like a timestamp but is not a valid date, e.g. 20231399_250000
                continue
        return None
