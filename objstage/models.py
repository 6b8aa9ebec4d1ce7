from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List

MERGE_PREFIX = "MRG2"
EXPORT_SUFFIX = ".txt"
OBJECT_FILE_GLOB = "*.txt"


class StagerError(Exception):
    """Base class for every error raised by the staging tool."""


class InvalidSourceCodeError(StagerError, ValueError):
    pass


class ConfigError(StagerError, ValueError):
    pass


class InventoryReadError(StagerError):
    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Cannot read export {path}: {cause}")
        self.path = path
        self.cause = cause


class ObjectToolError(StagerError):
    pass


class ToolUnavailableError(ObjectToolError):
    pass


class OutcomeStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    NOTICE = "notice"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class SourceExport:
    code: str
    path: Path


@dataclass(frozen=True, slots=True)
class ObjectRecord:
    object_type: str
    object_id: int


@dataclass(slots=True)
class TypeInventory:
    source: Path | None = None
    ids_by_type: Dict[str, List[int]] = field(default_factory=dict)

    def add(self, record: ObjectRecord) -> None:
        self.ids_by_type.setdefault(record.object_type, []).append(record.object_id)

    def types(self) -> List[str]:
        return sorted(self.ids_by_type)

    def sorted_ids(self, object_type: str) -> List[int]:
        return sorted(set(self.ids_by_type.get(object_type, [])))

    @property
    def is_empty(self) -> bool:
        return not self.ids_by_type

    @property
    def total_objects(self) -> int:
        return sum(len(set(ids)) for ids in self.ids_by_type.values())


@dataclass(frozen=True, slots=True)
class StagingArea:
    working_dir: Path
    code: str

    @property
    def export_file(self) -> Path:
        return self.working_dir / f"{self.code}{EXPORT_SUFFIX}"

    @property
    def split_dir(self) -> Path:
        return self.working_dir / self.code

    @property
    def merge_dir(self) -> Path:
        return self.working_dir / f"{MERGE_PREFIX}{self.code}"

    @property
    def merge_glob(self) -> Path:
        return self.merge_dir / OBJECT_FILE_GLOB

    @property
    def merged_file(self) -> Path:
        return self.working_dir / f"{MERGE_PREFIX}{self.code}{EXPORT_SUFFIX}"


@dataclass(slots=True)
class CodeOutcome:
    code: str
    status: OutcomeStatus
    message: str
    path: Path | None = None

    def describe(self) -> str:
        location = f" ({self.path})" if self.path else ""
        return f"{self.code}: {self.message}{location}"


@dataclass(slots=True)
class PhaseReport:
    phase: str
    outcomes: List[CodeOutcome] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    aborted: bool = False

    def record(self, outcome: CodeOutcome) -> CodeOutcome:
        self.outcomes.append(outcome)
        return outcome

    def _with_status(self, status: OutcomeStatus) -> List[CodeOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status == status]

    @property
    def succeeded(self) -> List[CodeOutcome]:
        return self._with_status(OutcomeStatus.OK)

    @property
    def failed(self) -> List[CodeOutcome]:
        return self._with_status(OutcomeStatus.WARNING)

    @property
    def notices(self) -> List[CodeOutcome]:
        return self._with_status(OutcomeStatus.NOTICE)

    @property
    def skipped(self) -> List[CodeOutcome]:
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def has_failures(self) -> bool:
        return self.aborted or bool(self.failed)

    def outcome_for(self, code: str) -> CodeOutcome | None:
        for outcome in self.outcomes:
            if outcome.code == code:
                return outcome
        return None
