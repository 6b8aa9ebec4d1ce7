from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import toml

from .logging_utils import log_warn
from .models import ConfigError, InvalidSourceCodeError
from .text_utils import normalize_codes

DEFAULT_CONFIG_NAME = "objstage.toml"
DEFAULT_ENCODING = "utf-8"


@dataclass(slots=True)
class ToolSettings:
    powershell: Path | None = None
    module: Path | None = None


@dataclass(slots=True)
class StagerConfig:
    working_dir: Path = field(default_factory=Path.cwd)
    codes: List[str] = field(default_factory=list)
    encoding: str = DEFAULT_ENCODING
    dry_run: bool = False
    tool: ToolSettings = field(default_factory=ToolSettings)

    def __post_init__(self) -> None:
        try:
            self.codes = normalize_codes(self.codes)
        except InvalidSourceCodeError as exc:
            raise ConfigError(str(exc)) from exc

    def select(self, requested: List[str] | None = None) -> List[str]:
        """Return the configured codes restricted to ``requested``, in configured order."""

        if not requested:
            return list(self.codes)
        try:
            wanted = set(normalize_codes(requested))
        except InvalidSourceCodeError as exc:
            raise ConfigError(str(exc)) from exc
        unknown = sorted(wanted - set(self.codes))
        if unknown:
            raise ConfigError(f"Source code(s) not configured: {', '.join(unknown)}")
        return [code for code in self.codes if code in wanted]


def is_command_name(path: Path) -> bool:
    """True for a bare executable name such as ``pwsh`` that is looked up on PATH."""

    return len(path.parts) == 1 and not path.is_absolute()


def _optional_path(value: Any, base_dir: Path, command: bool = False) -> Path | None:
    if not value:
        return None
    path = Path(str(value)).expanduser()
    if command and is_command_name(path):
        return path
    if not path.is_absolute():
        path = base_dir / path
    return path


def load_config(config_path: Path) -> StagerConfig:
    """Load working directory, source codes and split/join tool location from a TOML file.

    A missing file is not fatal: defaults are returned with the file's
    directory as working directory, so the tool can run before ``init``.
    """

    base_dir = config_path.parent.resolve()
    if not config_path.exists():
        log_warn(f"Configuration file {config_path} not found. Proceeding with defaults.")
        return StagerConfig(working_dir=base_dir)

    raw_text = config_path.read_text(encoding="utf-8")
    try:
        config = toml.loads(raw_text)
    except toml.TomlDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {config_path}") from exc

    codes = config.get("codes", [])
    if not isinstance(codes, list):
        raise ConfigError(f"'codes' must be a list in {config_path}")

    tool_section: Dict[str, Any] = config.get("tool", {})
    if not isinstance(tool_section, dict):
        raise ConfigError(f"'tool' must be a table in {config_path}")
    tool = ToolSettings(
        powershell=_optional_path(tool_section.get("powershell"), base_dir, command=True),
        module=_optional_path(tool_section.get("module"), base_dir),
    )
    return StagerConfig(
        working_dir=_optional_path(config.get("working_dir", "."), base_dir) or base_dir,
        codes=[str(code) for code in codes],
        encoding=str(config.get("encoding", DEFAULT_ENCODING)),
        dry_run=bool(config.get("dry_run", False)),
        tool=tool,
    )


def save_config(config: StagerConfig, config_path: Path) -> None:
    data: Dict[str, Any] = {
        "working_dir": str(config.working_dir),
        "codes": list(config.codes),
        "encoding": config.encoding,
        "dry_run": config.dry_run,
        "tool": {
            "powershell": str(config.tool.powershell) if config.tool.powershell else "",
            "module": str(config.tool.module) if config.tool.module else "",
        },
    }
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(toml.dumps(data), encoding="utf-8")
