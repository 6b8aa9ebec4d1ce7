from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List

from objstage import (
    InventoryReadError,
    ModelToolsCapability,
    SourceCatalog,
    StagerConfig,
    StagerError,
    StagingPipeline,
    export_inventory_report,
    inspect_export,
    load_config,
    print_inspection,
    print_phase_report,
    save_config,
)
from objstage.inventory import InspectionResult
from objstage.load_config import DEFAULT_CONFIG_NAME, is_command_name
from objstage.logging_utils import log_error, log_info, log_notice, log_ok, set_threshold
from objstage.models import StagingArea


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Inventory object exports (<CODE>.txt) in a working directory, split them into "
            "per-object merge areas and join the edited objects back into MRG2<CODE>.txt."
        )
    )
    parser.add_argument(
        "--config-path",
        type=Path,
        default=Path(DEFAULT_CONFIG_NAME),
        help="Path to the program configuration TOML file.",
    )
    parser.add_argument(
        "--working-dir",
        type=Path,
        default=None,
        help="Override the working directory from the configuration file.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the actions that would be taken by prepare and merge.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print warnings and errors.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List the source exports present in the working directory.")

    inspect_parser = commands.add_parser("inspect", help="Summarize the object IDs of one or more exports.")
    inspect_parser.add_argument("codes", nargs="*", help="Source codes to inspect (default: all available).")
    inspect_parser.add_argument(
        "--export-path",
        type=Path,
        default=None,
        help="Also save the inventory to this Excel file.",
    )

    prepare_parser = commands.add_parser("prepare", help="Split exports and seed the MRG2<CODE> directories.")
    prepare_parser.add_argument("codes", nargs="*", help="Source codes to prepare (default: all configured).")

    merge_parser = commands.add_parser("merge", help="Join MRG2<CODE>/*.txt into MRG2<CODE>.txt.")
    merge_parser.add_argument("codes", nargs="*", help="Source codes to merge (default: all configured).")

    init_parser = commands.add_parser("init", help="Write a configuration file.")
    init_parser.add_argument("codes", nargs="+", help="Source codes to recognise, e.g. DEV PRD BSE.")
    init_parser.add_argument("--module", type=Path, default=None, help="Path to the model tools module.")
    init_parser.add_argument("--powershell", type=Path, default=None, help="Path to the PowerShell executable.")
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> StagerConfig:
    config = load_config(args.config_path.expanduser())
    if args.working_dir is not None:
        config.working_dir = args.working_dir.expanduser().resolve()
    if args.dry_run:
        config.dry_run = True
    return config


def _run_list(catalog: SourceCatalog) -> int:
    exports = catalog.list_available()
    if not exports:
        log_notice(catalog.describe_empty())
        return 0
    log_info(f"Found {len(exports)} source export(s) in {catalog.working_dir}:")
    for export in exports:
        log_info(f"{export.code}: {export.path}", indent=2)
    return 0


def _run_inspect(catalog: SourceCatalog, config: StagerConfig, codes: List[str], export_path: Path | None) -> int:
    exports = catalog.list_available()
    if codes:
        wanted = config.select(codes)
        exports = [export for export in exports if export.code in wanted]
        found = {export.code for export in exports}
        for code in wanted:
            if code not in found:
                log_notice(f"{code}: export file not found: {StagingArea(catalog.working_dir, code).export_file}")
    elif not exports:
        log_notice(catalog.describe_empty())
    if not exports:
        return 0

    results: Dict[str, InspectionResult] = {}
    status = 0
    for export in exports:
        try:
            result = inspect_export(export, encoding=config.encoding)
        except InventoryReadError as exc:
            log_error(f"{export.code}: {exc}")
            status = 1
            continue
        print_inspection(result)
        results[export.code] = result

    if export_path is not None:
        if export_path.suffix.lower() != ".xlsx":
            export_path = export_path / "object_inventory.xlsx"
        export_inventory_report(export_path, results)
        log_ok(f"Inventory saved to {export_path}")
    return status


def _absolute(path: Path | None, command: bool = False) -> Path | None:
    """Anchor a path typed at the prompt to the current directory before it is saved."""

    if path is None:
        return None
    if command and is_command_name(path):
        return path
    return path.expanduser().resolve()


def _run_init(args: argparse.Namespace) -> int:
    config_path = args.config_path.expanduser()
    config = StagerConfig(working_dir=Path("."), codes=args.codes)
    config.tool.module = _absolute(args.module)
    config.tool.powershell = _absolute(args.powershell, command=True)
    save_config(config, config_path)
    log_ok(f"Configuration written to {config_path}")
    return 0


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    if args.quiet:
        set_threshold("warn")
    try:
        if args.command == "init":
            return _run_init(args)

        config = _build_config(args)
        if not config.working_dir.is_dir():
            raise SystemExit(f"Working directory {config.working_dir} does not exist.")
        catalog = SourceCatalog(config)

        if args.command == "list":
            return _run_list(catalog)
        if args.command == "inspect":
            return _run_inspect(catalog, config, args.codes, args.export_path)

        pipeline = StagingPipeline(config, ModelToolsCapability(config.tool))
        if args.command == "prepare":
            report = pipeline.prepare(args.codes)
        else:
            report = pipeline.merge(args.codes)
        print_phase_report(report)
        return 1 if report.has_failures else 0
    except StagerError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    raise SystemExit(main())
