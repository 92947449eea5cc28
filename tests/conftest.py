"""Shared fixtures for the Taxis test suite."""

import datetime
import io
import pathlib

import pytest
from rich.console import Console

from console_ui import ConsoleUI
from file_operations import OperationType
from taxis_config import TaxisConfig

UTC = datetime.timezone.utc


class ScriptedConfirmation:
    """Answers confirmations from a fixed list and records the questions"""

    def __init__(self, *answers: bool):
        self.answers = list(answers)
        self.questions: list[str] = []

    def __call__(self, message: str) -> bool:
        self.questions.append(message)
        return self.answers.pop(0)


@pytest.fixture
def ui() -> ConsoleUI:
    """ConsoleUI writing to an in-memory buffer"""
    return ConsoleUI(console=Console(file=io.StringIO(), width=200, highlight=False))


@pytest.fixture
def source_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "inbox"
    path.mkdir()
    return path


@pytest.fixture
def dest_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "library"
    path.mkdir()
    return path


@pytest.fixture
def make_config(source_dir, dest_dir):
    """Build a TaxisConfig with the test directories and overrides"""

    def _make(**overrides) -> TaxisConfig:
        values = {
            "source": source_dir,
            "destination": dest_dir,
            "mode": OperationType.COPY,
        }
        values.update(overrides)
        return TaxisConfig(**values)

    return _make


def write_file(path: pathlib.Path, content: bytes = b"image-bytes") -> pathlib.Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path
