#!/usr/bin/env python3
"""
Batch Coordination

Drives resolution, conflict handling, confirmation and transfer over the
discovered files. Two modes:

- per file: resolve, confirm and transfer each file in turn
- together: build the complete transfer plan, confirm once, transfer all

Problems with a single file (no destination, occupied destination, failed
transfer) are logged and recorded in the BatchReport; they never stop the run.
"""

import logging
import pathlib
from dataclasses import dataclass, field
from typing import Callable, Collection, Iterable, Optional

from auxiliary import relative_to_root
from conflict_resolver import ConflictAction, ConflictResolver
from console_ui import ConsoleUI
from device_aliases import AliasResolver
from file_operations import FileOperations, OperationType
from path_resolver import PathResolver
from taxis_config import TaxisConfig
from taxis_errors import TransferError, UnresolvedPathError

logger = logging.getLogger("taxis")

_VERBS = {
    OperationType.COPY: ("copy", "copied", "Copying"),
    OperationType.MOVE: ("move", "moved", "Moving"),
}


class AutoConfirmation:
    """Accepts everything (--yes, dry runs)"""

    def __call__(self, message: str) -> bool:
        return True


class PromptConfirmation:
    """Asks the user on the console"""

    def __init__(self, ui: ConsoleUI):
        self.ui = ui

    def __call__(self, message: str) -> bool:
        return self.ui.confirm(message)


def choose_confirmation(config: TaxisConfig, ui: ConsoleUI) -> Callable[[str], bool]:
    """Pick the confirmation policy for the whole run"""
    if config.yes or config.dry_run:
        return AutoConfirmation()
    return PromptConfirmation(ui)


@dataclass
class BatchReport:
    """What happened to each file of a run"""

    transferred: list[tuple[pathlib.Path, pathlib.Path]] = field(default_factory=list)
    failed: list[tuple[pathlib.Path, str]] = field(default_factory=list)
    declined: list[pathlib.Path] = field(default_factory=list)
    in_place: list[pathlib.Path] = field(default_factory=list)
    planned: dict[pathlib.Path, pathlib.Path] = field(default_factory=dict)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    def record_failure(self, source: pathlib.Path, reason: str):
        self.failed.append((source, reason))


def _is_same_file(source: pathlib.Path, candidate: pathlib.Path) -> bool:
    try:
        return candidate.exists() and candidate.samefile(source)
    except OSError:
        return False


class BatchCoordinator:
    """Runs the organize pipeline over a list of files"""

    def __init__(
        self,
        config: TaxisConfig,
        path_resolver: PathResolver,
        conflict_resolver: ConflictResolver,
        file_operations: FileOperations,
        confirmation: Callable[[str], bool],
        ui: ConsoleUI,
    ):
        self.config = config
        self.path_resolver = path_resolver
        self.conflict_resolver = conflict_resolver
        self.file_operations = file_operations
        self.confirmation = confirmation
        self.ui = ui
        self.verb, self.past_tense, self.progressive = _VERBS[config.mode]

    @classmethod
    def from_config(cls, config: TaxisConfig, ui: ConsoleUI) -> "BatchCoordinator":
        """Coordinator wired with the standard components"""
        return cls(
            config=config,
            path_resolver=PathResolver.default(AliasResolver(config.aliases)),
            conflict_resolver=ConflictResolver(overwrite=config.overwrite, no_skip=config.no_skip),
            file_operations=FileOperations(),
            confirmation=choose_confirmation(config, ui),
            ui=ui,
        )

    def run(self, files: Iterable[pathlib.Path]) -> BatchReport:
        """Organize files and report the outcome"""
        report = BatchReport()
        if self.config.together:
            self._run_together(files, report)
        else:
            self._run_per_file(files, report)

        if report.failure_count:
            logger.warning("%d files could not be organized", report.failure_count)
        logger.info("done")
        return report

    def plan_file(
        self, source: pathlib.Path, report: BatchReport, claimed: Collection[pathlib.Path] = ()
    ) -> Optional[pathlib.Path]:
        """Final destination for source, or None when it cannot or need not be transferred"""
        try:
            destination = self.path_resolver.resolve(source)
        except UnresolvedPathError as e:
            logger.error("Skipping %s: %s", source, e)
            report.record_failure(source, "no date in metadata or file name")
            return None

        candidate = self.config.destination / destination.relative_path
        if _is_same_file(source, candidate):
            logger.info("%s is already in place", source)
            report.in_place.append(source)
            return None

        decision = self.conflict_resolver.resolve(candidate, claimed)
        if decision.action is ConflictAction.SKIP:
            logger.warning("Skipping %s: %s already exists", source, candidate)
            report.record_failure(source, f"destination exists: {candidate}")
            return None
        if decision.action is ConflictAction.OVERWRITE:
            logger.warning("%s already exists and will be overwritten", candidate)
        elif decision.action is ConflictAction.RENAME:
            logger.info("%s already exists, using %s", candidate, decision.final_path.name)

        return decision.final_path

    def _run_per_file(self, files: Iterable[pathlib.Path], report: BatchReport):
        claimed: set[pathlib.Path] = set()
        for source in files:
            target = self.plan_file(source, report, claimed)
            if target is None:
                continue

            claimed.add(target)

            if self.config.dry_run:
                logger.info("Would %s %s to %s", self.verb, source, target)
                report.planned[source] = target
                continue

            if not self.confirmation(f"Are you sure you want to {self.verb} {source} to {target}?"):
                logger.info("Left %s untouched", source)
                report.declined.append(source)
                continue

            self._transfer_one(source, target, report)

    def _run_together(self, files: Iterable[pathlib.Path], report: BatchReport):
        claimed: set[pathlib.Path] = set()
        for source in files:
            target = self.plan_file(source, report, claimed)
            if target is not None:
                report.planned[source] = target
                claimed.add(target)

        if not report.planned:
            logger.info("Nothing to %s", self.verb)
            return

        self.ui.show_file_operations_preview(
            {
                relative_to_root(source, self.config.source): relative_to_root(target, self.config.destination)
                for source, target in report.planned.items()
            }
        )

        if self.config.dry_run:
            for source, target in report.planned.items():
                logger.info("Would %s %s to %s", self.verb, source, target)
            return

        if not self.confirmation(f"Are you sure you want to {self.verb} all {len(report.planned)} files?"):
            logger.info("Cancelled, no files were %s", self.past_tense)
            report.declined.extend(report.planned)
            return

        operations = self.file_operations.plan_batch_operations(report.planned, self.config.mode)
        with self.ui.create_progress() as progress:
            task = progress.add_task(f"{self.progressive} files...", total=len(operations))
            successful, failed = self.file_operations.execute_batch_operations(
                operations, progress_callback=lambda _message: progress.advance(task)
            )

        for result in successful:
            logger.info("%s %s to %s", self.past_tense.capitalize(), result.operation.source_path, result.operation.target_path)
            report.transferred.append((result.operation.source_path, result.operation.target_path))
        for result in failed:
            logger.error("Failed to %s %s", self.verb, result.error_message)
            report.record_failure(result.operation.source_path, result.error_message or "transfer failed")

    def _transfer_one(self, source: pathlib.Path, target: pathlib.Path, report: BatchReport):
        logger.info("%s is being %s to %s", source, self.past_tense, target)
        try:
            self.file_operations.transfer(source, target, self.config.mode)
        except TransferError as e:
            logger.error("Failed to %s %s", self.verb, e)
            report.record_failure(source, str(e))
            return
        report.transferred.append((source, target))
