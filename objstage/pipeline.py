from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

from .file_utils import copy_tree, has_files, list_object_files, remove_file, reset_directory
from .load_config import StagerConfig
from .logging_utils import log_info, log_notice, log_ok, log_warn
from .models import (
    CodeOutcome,
    ObjectToolError,
    OutcomeStatus,
    PhaseReport,
    StagingArea,
)
from .tooling import ObjectFileTool

STEP_ERRORS = (ObjectToolError, OSError, shutil.Error)


class StagingPipeline:
    """Two-phase split/seed and join lifecycle over the configured source codes.

    Prepare always wipes ``<CODE>/`` and ``MRG2<CODE>/`` before splitting, so
    any hand edits left in the merge directory are discarded. Running it twice
    on the same export gives the same result; it is never incremental.
    """

    def __init__(self, config: StagerConfig, tool: ObjectFileTool) -> None:
        self.config = config
        self.tool = tool

    @property
    def working_dir(self) -> Path:
        return self.config.working_dir

    def area(self, code: str) -> StagingArea:
        return StagingArea(self.working_dir, code)

    def _check_tool(self, report: PhaseReport) -> bool:
        if self.tool.is_available():
            return True
        message = (
            f"Object split/join tool is not available; {report.phase} skipped for all sources. "
            f"{self.tool.describe_unavailable()}"
        )
        log_warn(message)
        report.warnings.append(message)
        report.aborted = True
        return False

    def _fail(self, report: PhaseReport, code: str, message: str, path: Path, exc: BaseException) -> None:
        outcome = report.record(CodeOutcome(code, OutcomeStatus.WARNING, f"{message}: {exc}", path))
        log_warn(outcome.describe(), indent=2)

    def _notice(self, report: PhaseReport, code: str, message: str, path: Path) -> None:
        outcome = report.record(CodeOutcome(code, OutcomeStatus.NOTICE, message, path))
        log_notice(outcome.describe(), indent=2)

    def prepare(self, codes: List[str] | None = None) -> PhaseReport:
        report = PhaseReport(phase="prepare")
        selected = self.config.select(codes)
        if not self._check_tool(report):
            return report

        exports_found = 0
        for code in selected:
            area = self.area(code)
            if not area.export_file.is_file():
                report.record(CodeOutcome(code, OutcomeStatus.SKIPPED, "no export file", area.export_file))
                continue
            exports_found += 1
            log_info(f"Preparing source '{code}' from {area.export_file}")
            self._prepare_code(area, report)

        if not exports_found:
            message = f"No source exports found in {self.working_dir} for: {', '.join(selected) or '<no codes configured>'}"
            log_warn(message)
            report.warnings.append(message)
        return report

    def _prepare_code(self, area: StagingArea, report: PhaseReport) -> None:
        code = area.code
        if self.config.dry_run:
            log_info(f"Dry run: would reset {area.split_dir} and {area.merge_dir}", indent=2)
            log_info(f"Dry run: would split {area.export_file} into {area.split_dir}", indent=2)
            self._notice(report, code, "dry run, no changes made", area.export_file)
            return

        try:
            reset_directory(area.split_dir)
            reset_directory(area.merge_dir)
        except STEP_ERRORS as exc:
            self._fail(report, code, "could not reset staging directories", area.split_dir, exc)
            return

        try:
            self.tool.split(area.export_file, area.split_dir, preserve_formatting=True, overwrite=True)
        except STEP_ERRORS as exc:
            self._fail(report, code, "split failed", area.export_file, exc)
            return

        if not has_files(area.split_dir):
            self._notice(report, code, "split produced no files, nothing to seed", area.split_dir)
            return

        try:
            copy_tree(area.split_dir, area.merge_dir)
        except STEP_ERRORS as exc:
            self._fail(report, code, "could not seed merge directory", area.merge_dir, exc)
            return

        seeded = len(list_object_files(area.merge_dir))
        outcome = report.record(
            CodeOutcome(code, OutcomeStatus.OK, f"split and seeded {seeded} object file(s)", area.merge_dir)
        )
        log_ok(outcome.describe(), indent=2)

    def merge(self, codes: List[str] | None = None) -> PhaseReport:
        report = PhaseReport(phase="merge")
        selected = self.config.select(codes)
        if not self._check_tool(report):
            return report

        for code in selected:
            area = self.area(code)
            if not area.merge_dir.is_dir():
                report.record(CodeOutcome(code, OutcomeStatus.SKIPPED, "no merge directory", area.merge_dir))
                continue
            log_info(f"Merging source '{code}' from {area.merge_dir}")
            self._merge_code(area, report)
        return report

    def _merge_code(self, area: StagingArea, report: PhaseReport) -> None:
        code = area.code
        sources = list_object_files(area.merge_dir)
        if not sources:
            self._notice(report, code, "no object files, nothing to merge", area.merge_dir)
            return

        if self.config.dry_run:
            log_info(f"Dry run: would join {len(sources)} file(s) into {area.merged_file}", indent=2)
            self._notice(report, code, "dry run, no changes made", area.merged_file)
            return

        try:
            remove_file(area.merged_file)
            self.tool.join(area.merge_glob, area.merged_file)
        except STEP_ERRORS as exc:
            self._fail(report, code, "join failed", area.merged_file, exc)
            return

        outcome = report.record(
            CodeOutcome(code, OutcomeStatus.OK, f"joined {len(sources)} object file(s)", area.merged_file)
        )
        log_ok(outcome.describe(), indent=2)


__all__ = ["StagingPipeline"]
