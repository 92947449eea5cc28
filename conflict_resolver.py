#!/usr/bin/env python3
"""
Destination Conflict Resolution

Decides what happens when a candidate destination is already occupied:
overwrite it, skip the file, or derive a new name with a _new_<timestamp>
suffix before the extension.
"""

import datetime
import pathlib
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Collection

RENAME_MARKER = "_new_"
RENAME_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


class ConflictAction(Enum):
    """Outcome of conflict resolution"""

    PROCEED = "proceed"
    SKIP = "skip"
    OVERWRITE = "overwrite"
    RENAME = "rename"


@dataclass(frozen=True)
class ConflictDecision:
    final_path: pathlib.Path
    action: ConflictAction


class ConflictResolver:
    """Applies the overwrite / no-skip policy to candidate destinations"""

    def __init__(
        self,
        overwrite: bool = False,
        no_skip: bool = False,
        clock: Callable[[], datetime.datetime] = datetime.datetime.now,
    ):
        self.overwrite = overwrite
        self.no_skip = no_skip
        self.clock = clock

    def resolve(self, candidate: pathlib.Path, claimed: Collection[pathlib.Path] = ()) -> ConflictDecision:
        """Decide the final path for candidate

        Args:
            candidate: Absolute destination computed by the path resolver
            claimed: Destinations already assigned earlier in the same plan,
                treated as occupied

        Returns:
            ConflictDecision with the final path and the action taken
        """
        in_plan = candidate in claimed
        if not in_plan and not candidate.exists():
            return ConflictDecision(candidate, ConflictAction.PROCEED)

        # Only files present before the run may be overwritten
        if self.overwrite and not in_plan:
            return ConflictDecision(candidate, ConflictAction.OVERWRITE)

        if not self.no_skip:
            return ConflictDecision(candidate, ConflictAction.SKIP)

        return ConflictDecision(self.renamed_path(candidate, claimed), ConflictAction.RENAME)

    def renamed_path(self, candidate: pathlib.Path, claimed: Collection[pathlib.Path] = ()) -> pathlib.Path:
        """img.jpg -> img_new_20230401101500.jpg, in the same directory

        A name that is taken on disk or in claimed gets a counter:
        img_new_20230401101500_1.jpg, img_new_20230401101500_2.jpg, ...
        """
        stem = f"{candidate.stem}{RENAME_MARKER}{self.clock().strftime(RENAME_TIMESTAMP_FORMAT)}"
        renamed = candidate.with_name(f"{stem}{candidate.suffix}")
        counter = 0
        while renamed in claimed or renamed.exists():
            counter += 1
            renamed = candidate.with_name(f"{stem}_{counter}{candidate.suffix}")
        return renamed
