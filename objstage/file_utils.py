from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import List, Sequence

from .logging_utils import log_info
from .models import ObjectToolError


def reset_directory(path: Path) -> None:
    """Remove ``path`` with everything under it and recreate it empty."""

    if path.exists():
        if path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink()
    path.mkdir(parents=True)


def copy_tree(source: Path, destination: Path) -> None:
    if destination.exists():
        shutil.rmtree(destination)
    shutil.copytree(source, destination)


def has_files(directory: Path) -> bool:
    if not directory.is_dir():
        return False
    return any(path.is_file() for path in directory.rglob("*"))


def list_object_files(directory: Path, suffix: str = ".txt") -> List[Path]:
    """Return the files directly inside ``directory`` whose suffix matches, ignoring case."""

    if not directory.is_dir():
        return []
    wanted = suffix.lower()
    return sorted(
        path for path in directory.iterdir() if path.is_file() and path.suffix.lower() == wanted
    )


def remove_file(path: Path) -> bool:
    if not path.exists():
        return False
    path.unlink()
    log_info(f"Removed previous output: {path}", indent=2)
    return True


def run_command(command: Sequence[str], *, cwd: Path | None = None, dry_run: bool = False) -> str:
    printable = " ".join(command)
    if dry_run:
        log_info(f"Dry run, not executing: {printable}", indent=2)
        return ""
    try:
        result = subprocess.run(
            list(command),
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        raise ObjectToolError(f"Failed to start {command[0]}: {exc}") from exc
    if result.returncode != 0:
        detail = (result.stderr or result.stdout or "").strip()
        raise ObjectToolError(f"{command[0]} exited with status {result.returncode}: {detail}")
    return result.stdout
