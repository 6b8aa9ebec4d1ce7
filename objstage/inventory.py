from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from .models import InventoryReadError, ObjectRecord, SourceExport, TypeInventory
from .text_utils import OBJECT_HEADER_PATTERN, compress_ranges

DEFAULT_ENCODING = "utf-8"


@dataclass(slots=True)
class InspectionResult:
	export: SourceExport
	inventory: TypeInventory
	lines: List[str]

	@property
	def is_empty(self) -> bool:
		return self.inventory.is_empty


def parse_object_line(line: str) -> ObjectRecord | None:
	"""Return the (type, id) pair of an ``OBJECT <Type> <Id>`` header line, if it is one."""

	match = OBJECT_HEADER_PATTERN.match(line)
	if not match:
		return None
	return ObjectRecord(object_type=match.group(1), object_id=int(match.group(2)))


def parse_object_lines(lines: Iterable[str], source: Path | None = None) -> TypeInventory:
	"""Collect object headers from export text; body lines are ignored."""

	inventory = TypeInventory(source=source)
	for line in lines:
		record = parse_object_line(line)
		if record is None:
			continue
		inventory.add(record)
	return inventory


def read_inventory(path: Path, encoding: str = DEFAULT_ENCODING) -> TypeInventory:
	try:
		with path.open("r", encoding=encoding) as handle:
			return parse_object_lines(handle, source=path)
	except (OSError, UnicodeDecodeError, LookupError) as exc:
		raise InventoryReadError(path, exc) from exc


def render_inventory(inventory: TypeInventory) -> List[str]:
	return [
		f"{object_type}: {compress_ranges(inventory.sorted_ids(object_type))}"
		for object_type in inventory.types()
	]


def inspect_export(export: SourceExport, encoding: str = DEFAULT_ENCODING) -> InspectionResult:
	"""Parse one export and render its summary.

	Raises InventoryReadError when the file cannot be read. A readable export
	without any object header yields an empty result rather than an error.
	"""

	inventory = read_inventory(export.path, encoding=encoding)
	return InspectionResult(export=export, inventory=inventory, lines=render_inventory(inventory))


__all__ = [
	"InspectionResult",
	"parse_object_line",
	"parse_object_lines",
	"read_inventory",
	"render_inventory",
	"inspect_export",
]
