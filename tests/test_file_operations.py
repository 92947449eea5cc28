"""Tests for copy and move transfers."""

import os

import pytest

from conftest import write_file
from file_operations import FileOperation, FileOperations, OperationType
from taxis_errors import TransferError


class TestTransfer:
    def test_copy_leaves_source_identical(self, tmp_path):
        source = write_file(tmp_path / "in" / "img.jpg", b"\xff\xd8 jpeg payload" * 1000)
        target = tmp_path / "out" / "2023" / "04" / "img.jpg"

        FileOperations(chunk_size=64).transfer(source, target, OperationType.COPY)

        assert source.exists()
        assert target.read_bytes() == source.read_bytes()

    def test_copy_is_synced(self, tmp_path, monkeypatch):
        source = write_file(tmp_path / "img.jpg")
        target = tmp_path / "out" / "img.jpg"
        synced = []
        real_fsync = os.fsync

        def recording_fsync(fd):
            synced.append(fd)
            real_fsync(fd)

        monkeypatch.setattr(os, "fsync", recording_fsync)

        FileOperations().transfer(source, target, OperationType.COPY)

        assert len(synced) == 1

    def test_copy_overwrites_existing_target(self, tmp_path):
        source = write_file(tmp_path / "img.jpg", b"new")
        target = write_file(tmp_path / "out" / "img.jpg", b"old and longer")

        FileOperations().transfer(source, target, OperationType.COPY)

        assert target.read_bytes() == b"new"

    def test_move_removes_source(self, tmp_path):
        source = write_file(tmp_path / "in" / "img.jpg", b"payload")
        inode = source.stat().st_ino
        target = tmp_path / "out" / "2023" / "04" / "img.jpg"

        FileOperations().transfer(source, target, OperationType.MOVE)

        assert not source.exists()
        assert target.read_bytes() == b"payload"
        assert target.stat().st_ino == inode

    def test_existing_directories_are_fine(self, tmp_path):
        (tmp_path / "out").mkdir()
        source = write_file(tmp_path / "img.jpg")

        FileOperations().transfer(source, tmp_path / "out" / "img.jpg", OperationType.MOVE)

        assert (tmp_path / "out" / "img.jpg").exists()

    def test_missing_source_raises_with_context(self, tmp_path):
        source = tmp_path / "gone.jpg"
        target = tmp_path / "out" / "gone.jpg"

        with pytest.raises(TransferError) as excinfo:
            FileOperations().transfer(source, target, OperationType.COPY)

        assert excinfo.value.source == source
        assert excinfo.value.target == target
        assert isinstance(excinfo.value.cause, OSError)
        assert str(source) in str(excinfo.value)

    def test_failed_rename_is_not_retried_as_copy(self, tmp_path, monkeypatch):
        source = write_file(tmp_path / "img.jpg")
        target = tmp_path / "out" / "img.jpg"

        def cross_device(self, other):
            raise OSError(18, "Invalid cross-device link")

        monkeypatch.setattr(type(source), "replace", cross_device)

        with pytest.raises(TransferError, match="cross-device"):
            FileOperations().transfer(source, target, OperationType.MOVE)

        assert source.exists()
        assert not target.exists()


class TestBatchOperations:
    def test_failures_do_not_stop_the_batch(self, tmp_path):
        good = write_file(tmp_path / "good.jpg")
        missing = tmp_path / "missing.jpg"
        ops = FileOperations()
        operations = ops.plan_batch_operations(
            {missing: tmp_path / "out" / "missing.jpg", good: tmp_path / "out" / "good.jpg"}, OperationType.COPY
        )

        successful, failed = ops.execute_batch_operations(operations)

        assert [r.operation.source_path for r in successful] == [good]
        assert [r.operation.source_path for r in failed] == [missing]
        assert failed[0].error_message

    def test_progress_callback_per_operation(self, tmp_path):
        messages = []
        ops = FileOperations(progress_callback=messages.append)
        mappings = {write_file(tmp_path / f"{i}.jpg"): tmp_path / "out" / f"{i}.jpg" for i in range(3)}

        ops.execute_batch_operations(ops.plan_batch_operations(mappings, OperationType.MOVE))

        assert len(messages) == 3
        assert "(3/3)" in messages[-1]

    def test_per_batch_progress_callback(self, tmp_path):
        messages = []
        ops = FileOperations()
        mappings = {write_file(tmp_path / f"{i}.jpg"): tmp_path / "out" / f"{i}.jpg" for i in range(2)}

        ops.execute_batch_operations(ops.plan_batch_operations(mappings, OperationType.COPY), messages.append)

        assert len(messages) == 2
        assert ops.progress_callback is None

    def test_empty_batch(self):
        assert FileOperations().execute_batch_operations([]) == ([], [])

    def test_identifier_defaults_to_name(self, tmp_path):
        operation = FileOperation(tmp_path / "a.jpg", tmp_path / "b.jpg", OperationType.COPY)

        assert operation.identifier == "a.jpg"
