from __future__ import annotations

from pathlib import Path
from typing import Dict

from openpyxl import Workbook

from .inventory import InspectionResult
from .logging_utils import log_info, log_notice, log_ok, log_warn
from .models import OutcomeStatus, PhaseReport
from .text_utils import compress_ranges


def print_inspection(result: InspectionResult) -> None:
    export = result.export
    if result.is_empty:
        log_notice(f"{export.code}: no object headers found in {export.path}")
        return
    log_info(f"Objects in {export.code} ({export.path}):")
    for line in result.lines:
        log_info(line, indent=2)
    log_info(f"Total objects: {result.inventory.total_objects}")


def print_phase_report(report: PhaseReport) -> None:
    if report.aborted:
        log_warn(f"{report.phase.capitalize()} did not run.")
        return
    counts = {status: 0 for status in OutcomeStatus}
    for outcome in report.outcomes:
        counts[outcome.status] += 1
    summary = ", ".join(f"{counts[status]} {status.value}" for status in OutcomeStatus)
    if report.has_failures:
        log_warn(f"{report.phase.capitalize()} finished with problems: {summary}")
        for outcome in report.failed:
            log_warn(outcome.describe(), indent=2)
    else:
        log_ok(f"{report.phase.capitalize()} finished: {summary}")


def export_inventory_report(output_path: Path, results: Dict[str, InspectionResult]) -> None:
    """Write an Excel workbook with a per-type summary sheet and a flat object list."""

    output_path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()

    summary_sheet = workbook.active
    if not summary_sheet:
        summary_sheet = workbook.create_sheet("summary")
    else:
        summary_sheet.title = "summary"
    summary_sheet.append(["source", "object type", "count", "ranges", "export path"])

    objects_sheet = workbook.create_sheet("objects")
    objects_sheet.append(["source", "object type", "object id"])

    for code, result in results.items():
        inventory = result.inventory
        for object_type in inventory.types():
            ids = inventory.sorted_ids(object_type)
            summary_sheet.append([code, object_type, len(ids), compress_ranges(ids), str(result.export.path)])
            for object_id in ids:
                objects_sheet.append([code, object_type, object_id])

    workbook.save(output_path)
    workbook.close()


__all__ = ["print_inspection", "print_phase_report", "export_inventory_report"]
