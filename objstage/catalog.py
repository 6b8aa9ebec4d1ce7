from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .load_config import StagerConfig
from .models import EXPORT_SUFFIX, SourceExport


def list_available(working_dir: Path, codes: Iterable[str]) -> List[SourceExport]:
    """Return the exports present in ``working_dir``, in the order ``codes`` were given."""

    exports: List[SourceExport] = []
    for raw_code in codes:
        code = raw_code.strip().upper()
        path = working_dir / f"{code}{EXPORT_SUFFIX}"
        if path.is_file():
            exports.append(SourceExport(code=code, path=path))
    return exports


class SourceCatalog:
    def __init__(self, config: StagerConfig) -> None:
        self.config = config

    @property
    def working_dir(self) -> Path:
        return self.config.working_dir

    def list_available(self) -> List[SourceExport]:
        return list_available(self.working_dir, self.config.codes)

    def find(self, code: str) -> SourceExport | None:
        wanted = code.strip().upper()
        for export in self.list_available():
            if export.code == wanted:
                return export
        return None

    def describe_empty(self) -> str:
        if not self.config.codes:
            return "No source codes are configured. Add codes to the configuration file."
        joined = ", ".join(f"{code}{EXPORT_SUFFIX}" for code in self.config.codes)
        return f"No source exports found in {self.working_dir} (looked for {joined})."
