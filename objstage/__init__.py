"""Core package for staging, inventorying and recombining object exports."""

from .catalog import SourceCatalog, list_available
from .inventory import inspect_export, parse_object_lines, read_inventory, render_inventory
from .load_config import StagerConfig, ToolSettings, load_config, save_config
from .models import (
    CodeOutcome,
    ConfigError,
    InventoryReadError,
    ObjectRecord,
    ObjectToolError,
    OutcomeStatus,
    PhaseReport,
    SourceExport,
    StagerError,
    StagingArea,
    ToolUnavailableError,
    TypeInventory,
)
from .pipeline import StagingPipeline
from .report import export_inventory_report, print_inspection, print_phase_report
from .text_utils import compress_ranges, expand_ranges, normalize_code
from .tooling import ModelToolsCapability, ObjectFileTool

__all__ = [
    "CodeOutcome",
    "ConfigError",
    "InventoryReadError",
    "ObjectRecord",
    "ObjectToolError",
    "OutcomeStatus",
    "PhaseReport",
    "SourceExport",
    "StagerError",
    "StagingArea",
    "ToolUnavailableError",
    "TypeInventory",
    "StagerConfig",
    "ToolSettings",
    "load_config",
    "save_config",
    "SourceCatalog",
    "list_available",
    "parse_object_lines",
    "read_inventory",
    "render_inventory",
    "inspect_export",
    "compress_ranges",
    "expand_ranges",
    "normalize_code",
    "StagingPipeline",
    "ObjectFileTool",
    "ModelToolsCapability",
    "print_inspection",
    "print_phase_report",
    "export_inventory_report",
]
