"""Pytest configuration and shared fixtures for the staging tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator, List, Set

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    # Ensure tests can import `objstage` and `cli` without package installation.
    sys.path.insert(0, project_root_str)

from objstage.file_utils import list_object_files  # noqa: E402
from objstage.load_config import StagerConfig  # noqa: E402
from objstage.logging_utils import set_threshold  # noqa: E402
from objstage.models import ObjectToolError  # noqa: E402
from objstage.text_utils import OBJECT_HEADER_PATTERN  # noqa: E402

DEV_EXPORT = """OBJECT Table 18 Customer
{
  OBJECT-PROPERTIES
  {
    Date=01.01.20;
  }
}

OBJECT Page 30 Item Card
{
  PROPERTIES
  {
  }
}
"""


class FakeObjectTool:
    """In-process split/join pair: one file per OBJECT header, joined by concatenation."""

    def __init__(self, available: bool = True, fail_split: Set[str] | None = None, fail_join: Set[str] | None = None) -> None:
        self.available = available
        self.fail_split = fail_split or set()
        self.fail_join = fail_join or set()
        self.split_calls: List[tuple[Path, Path, bool, bool]] = []
        self.join_calls: List[tuple[Path, Path]] = []

    def is_available(self) -> bool:
        return self.available

    def describe_unavailable(self) -> str:
        return "fake tool switched off"

    def split(self, source: Path, destination: Path, *, preserve_formatting: bool = True, overwrite: bool = True) -> None:
        self.split_calls.append((source, destination, preserve_formatting, overwrite))
        if source.stem in self.fail_split:
            raise ObjectToolError(f"cannot split {source.name}")
        current_name: str | None = None
        current_lines: List[str] = []
        for line in source.read_text(encoding="utf-8").splitlines(keepends=True):
            match = OBJECT_HEADER_PATTERN.match(line)
            if match:
                self._write(destination, current_name, current_lines)
                current_name = f"{match.group(1)[:3].upper()}{match.group(2)}.TXT"
                current_lines = []
            current_lines.append(line)
        self._write(destination, current_name, current_lines)

    @staticmethod
    def _write(destination: Path, name: str | None, lines: List[str]) -> None:
        if name is None:
            return
        (destination / name).write_text("".join(lines), encoding="utf-8")

    def join(self, source_glob: Path, destination: Path) -> None:
        self.join_calls.append((source_glob, destination))
        if destination.stem.removeprefix("MRG2") in self.fail_join:
            raise ObjectToolError(f"cannot join into {destination.name}")
        sources = list_object_files(source_glob.parent, suffix=source_glob.suffix)
        destination.write_text(
            "".join(path.read_text(encoding="utf-8") for path in sources), encoding="utf-8"
        )


@pytest.fixture
def working_dir(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    root.mkdir()
    return root


@pytest.fixture
def config(working_dir: Path) -> StagerConfig:
    return StagerConfig(working_dir=working_dir, codes=["DEV", "PRD", "BSE"])


@pytest.fixture
def fake_tool() -> FakeObjectTool:
    return FakeObjectTool()


@pytest.fixture(autouse=True)
def reset_log_threshold() -> Iterator[None]:
    yield
    set_threshold("info")
