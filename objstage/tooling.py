from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Protocol, Sequence

from .file_utils import run_command
from .load_config import ToolSettings
from .models import ToolUnavailableError

POWERSHELL_CANDIDATES = ("pwsh", "powershell")


class ObjectFileTool(Protocol):
	"""Splits a combined object export into per-object files and joins them back."""

	def is_available(self) -> bool: ...

	def describe_unavailable(self) -> str: ...

	def split(self, source: Path, destination: Path, *, preserve_formatting: bool = True, overwrite: bool = True) -> None: ...

	def join(self, source_glob: Path, destination: Path) -> None: ...


@dataclass(slots=True)
class ExternalTool:
	executable: Path
	args: Sequence[str] = ()

	def run(self, extra_args: Sequence[str] = (), *, cwd: Path | None = None, dry_run: bool = False) -> str:
		command = [str(self.executable), *self.args, *extra_args]
		return run_command(command, cwd=cwd, dry_run=dry_run)


def _quote(path: Path) -> str:
	return "'" + str(path).replace("'", "''") + "'"


def resolve_powershell(explicit: Path | None = None) -> Path | None:
	if explicit is not None:
		if explicit.is_file():
			return explicit
		found = shutil.which(str(explicit))
		return Path(found) if found else None
	for candidate in POWERSHELL_CANDIDATES:
		found = shutil.which(candidate)
		if found:
			return Path(found)
	return None


class ModelToolsCapability:
	"""Object split/join backed by the vendor's PowerShell model tools module.

	Each call starts a fresh PowerShell process that imports the module and
	runs ``Split-NAVApplicationObjectFile`` or ``Join-NAVApplicationObjectFile``.
	"""

	def __init__(self, settings: ToolSettings) -> None:
		self.settings = settings
		self._powershell = resolve_powershell(settings.powershell)

	def is_available(self) -> bool:
		if self._powershell is None:
			return False
		module = self.settings.module
		return module is not None and module.exists()

	def describe_unavailable(self) -> str:
		if self._powershell is None:
			return "PowerShell executable not found (tried: " + ", ".join(POWERSHELL_CANDIDATES) + ")."
		return f"Model tools module not found: {self.settings.module or '<not configured>'}"

	def _tool(self) -> ExternalTool:
		if not self.is_available() or self._powershell is None:
			raise ToolUnavailableError(self.describe_unavailable())
		return ExternalTool(self._powershell, args=("-NoProfile", "-NonInteractive", "-Command"))

	def _script(self, body: str) -> str:
		module = self.settings.module
		if module is None:
			raise ToolUnavailableError(self.describe_unavailable())
		return f"$ErrorActionPreference = 'Stop'; Import-Module {_quote(module)}; {body}"

	def split_script(self, source: Path, destination: Path, *, preserve_formatting: bool = True, overwrite: bool = True) -> str:
		parts: List[str] = [
			"Split-NAVApplicationObjectFile",
			f"-Source {_quote(source)}",
			f"-Destination {_quote(destination)}",
		]
		if preserve_formatting:
			parts.append("-PreserveFormatting")
		if overwrite:
			parts.append("-Force")
		return self._script(" ".join(parts))

	def join_script(self, source_glob: Path, destination: Path) -> str:
		# The cmdlet expands the wildcard, so the command length stays fixed.
		return self._script(
			f"Join-NAVApplicationObjectFile -Source {_quote(source_glob)} -Destination {_quote(destination)} -Force"
		)

	def split(self, source: Path, destination: Path, *, preserve_formatting: bool = True, overwrite: bool = True) -> None:
		script = self.split_script(source, destination, preserve_formatting=preserve_formatting, overwrite=overwrite)
		self._tool().run([script], cwd=destination.parent)

	def join(self, source_glob: Path, destination: Path) -> None:
		script = self.join_script(source_glob, destination)
		self._tool().run([script], cwd=destination.parent)


__all__ = [
	"ObjectFileTool",
	"ExternalTool",
	"ModelToolsCapability",
	"resolve_powershell",
]
