#!/usr/bin/env python3
"""
File Transfer Operations

Copies or moves files into the organized tree:
- Copy streams the bytes and fsyncs the destination before reporting success
- Move is a single atomic rename; a failed rename is reported, never retried
  as copy + delete
- Missing destination directories are created on demand
"""

import os
import pathlib
import shutil
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from taxis_errors import TransferError

COPY_CHUNK_SIZE = 1024 * 1024


class OperationType(Enum):
    """Type of file operation"""

    MOVE = "move"
    COPY = "copy"


@dataclass
class FileOperation:
    """Represents a planned file operation"""

    source_path: pathlib.Path
    target_path: pathlib.Path
    operation_type: OperationType
    identifier: str = ""  # Optional identifier for tracking

    def __post_init__(self):
        if not self.identifier:
            self.identifier = self.source_path.name


@dataclass
class OperationResult:
    """Result of a file operation"""

    operation: FileOperation
    success: bool
    error_message: Optional[str] = None


class FileOperations:
    """Executes copy and move operations one file at a time"""

    def __init__(
        self, progress_callback: Optional[Callable[[str], None]] = None, chunk_size: int = COPY_CHUNK_SIZE
    ):
        """Initialize with optional progress callback"""
        self.progress_callback = progress_callback
        self.chunk_size = chunk_size

    def transfer(self, source_path: pathlib.Path, target_path: pathlib.Path, operation_type: OperationType):
        """Copy or move source_path to target_path

        Raises:
            TransferError: If creating the directory, copying, syncing or renaming fails
        """
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)

            if operation_type == OperationType.COPY:
                self._copy_and_sync(source_path, target_path)
            elif operation_type == OperationType.MOVE:
                source_path.replace(target_path)
        except OSError as e:
            raise TransferError(source_path, target_path, e) from e

    def execute_operation(self, operation: FileOperation) -> OperationResult:
        """Execute a single file operation"""
        try:
            self.transfer(operation.source_path, operation.target_path, operation.operation_type)
        except TransferError as e:
            return OperationResult(operation=operation, success=False, error_message=str(e))
        return OperationResult(operation=operation, success=True)

    def execute_batch_operations(
        self, operations: list[FileOperation], progress_callback: Optional[Callable[[str], None]] = None
    ) -> tuple[list[OperationResult], list[OperationResult]]:
        """Execute multiple file operations and return success/failure lists

        progress_callback, when given, replaces the instance callback for this batch.
        """
        if not operations:
            return [], []

        progress_callback = progress_callback or self.progress_callback

        successful_operations = []
        failed_operations = []

        for i, operation in enumerate(operations):
            result = self.execute_operation(operation)

            if result.success:
                successful_operations.append(result)
            else:
                failed_operations.append(result)

            if progress_callback:
                progress_callback(f"Processed {operation.identifier} ({i + 1}/{len(operations)})")

        return successful_operations, failed_operations

    def plan_operation(
        self, source_path: pathlib.Path, target_path: pathlib.Path, operation_type: OperationType, identifier: str = ""
    ) -> FileOperation:
        """Create a planned file operation"""
        return FileOperation(
            source_path=source_path,
            target_path=target_path,
            operation_type=operation_type,
            identifier=identifier or source_path.name,
        )

    def plan_batch_operations(
        self, file_mappings: dict[pathlib.Path, pathlib.Path], operation_type: OperationType
    ) -> list[FileOperation]:
        """Create multiple planned operations from source->target mappings"""
        return [
            self.plan_operation(source_path, target_path, operation_type)
            for source_path, target_path in file_mappings.items()
        ]

    def _copy_and_sync(self, source_path: pathlib.Path, target_path: pathlib.Path):
        """Stream source into target and flush it to disk"""
        with source_path.open("rb") as src, target_path.open("wb") as dst:
            shutil.copyfileobj(src, dst, self.chunk_size)
            dst.flush()
            os.fsync(dst.fileno())
