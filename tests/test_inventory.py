"""Behavior-focused tests for object header recognition and inventory rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from objstage.inventory import (
    inspect_export,
    parse_object_line,
    parse_object_lines,
    read_inventory,
    render_inventory,
)
from objstage.models import InventoryReadError, ObjectRecord, SourceExport


def test_header_line_contributes_type_and_id() -> None:
    assert parse_object_line("OBJECT Table 18") == ObjectRecord("Table", 18)
    assert parse_object_line("  OBJECT Codeunit 80 Sales-Post\n") == ObjectRecord("Codeunit", 80)
    assert parse_object_line("\tOBJECT XMLport 5050 Import Contacts") == ObjectRecord("XMLport", 5050)


@pytest.mark.parametrize(
    "line",
    [
        "  object table 18",
        "OBJECTX Table 18",
        "OBJECT Table 18a",
        "OBJECT Table abc",
        "OBJECT Table",
        "OBJECT-PROPERTIES",
        "    Date=01.01.20;",
        "",
    ],
)
def test_non_header_lines_are_ignored(line: str) -> None:
    assert parse_object_line(line) is None


def test_parse_groups_ids_by_case_sensitive_type() -> None:
    lines = [
        "OBJECT Table 18 Customer",
        "{",
        "OBJECT Page 30 Item Card",
        "OBJECT Table 17 G/L Entry",
        "OBJECT table 99 lower",
    ]
    inventory = parse_object_lines(lines)
    assert inventory.ids_by_type == {"Table": [18, 17], "Page": [30], "table": [99]}
    assert inventory.types() == ["Page", "Table", "table"]


def test_render_sorts_types_and_ids() -> None:
    lines = [f"OBJECT Table {object_id}" for object_id in (5, 3, 4, 1, 9)]
    lines += ["OBJECT Codeunit 80", "OBJECT Codeunit 81"]
    rendered = render_inventory(parse_object_lines(lines))
    assert rendered == ["Codeunit: 80|81", "Table: 1|3..5|9"]


def test_repeated_ids_are_counted_once() -> None:
    inventory = parse_object_lines(["OBJECT Table 18", "OBJECT Table 19", "OBJECT Table 18", "OBJECT Table 20"])
    assert inventory.ids_by_type["Table"] == [18, 19, 18, 20]
    assert inventory.sorted_ids("Table") == [18, 19, 20]
    assert render_inventory(inventory) == ["Table: 18..20"]
    assert inventory.total_objects == 3


def test_read_inventory_from_file(working_dir: Path) -> None:
    export = working_dir / "DEV.txt"
    export.write_text("OBJECT Table 18 Customer\n{\n}\nOBJECT Page 30 Item Card\n", encoding="utf-8")
    inventory = read_inventory(export)
    assert inventory.source == export
    assert render_inventory(inventory) == ["Page: 30", "Table: 18"]


def test_read_inventory_missing_file_names_path(working_dir: Path) -> None:
    missing = working_dir / "PRD.txt"
    with pytest.raises(InventoryReadError) as excinfo:
        read_inventory(missing)
    assert excinfo.value.path == missing
    assert isinstance(excinfo.value.cause, FileNotFoundError)
    assert str(missing) in str(excinfo.value)


def test_read_inventory_wraps_decode_errors(working_dir: Path) -> None:
    export = working_dir / "DEV.txt"
    export.write_bytes(b"OBJECT Table 18 Kunde \x81\xfe\n")
    with pytest.raises(InventoryReadError) as excinfo:
        read_inventory(export, encoding="utf-8")
    assert isinstance(excinfo.value.cause, UnicodeDecodeError)
    # The same bytes read fine in the legacy code page.
    assert read_inventory(export, encoding="cp850").sorted_ids("Table") == [18]


def test_inspect_export_without_headers_is_empty_not_error(working_dir: Path) -> None:
    export = working_dir / "BSE.txt"
    export.write_text("just some text\nwithout objects\n", encoding="utf-8")
    result = inspect_export(SourceExport("BSE", export))
    assert result.is_empty
    assert result.lines == []
