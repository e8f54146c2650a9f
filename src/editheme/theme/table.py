"""Bundled theme table loading and integrity checks."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from json import JSONDecodeError
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple

import jsonschema

from ..errors import CorruptTableError
from .models import RULES, STRUCTURAL_RULES, ThemeRecord, ThemeRow, normalize_hex

__all__ = ["BUNDLED_TABLE_PATH", "TABLE_SCHEMA", "ThemeTable", "bundled_table", "load_table"]

LOGGER = logging.getLogger(__name__)
BUNDLED_TABLE_PATH = Path(__file__).resolve().parent / "data" / "rstudio_themes.json"

TABLE_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["rows"],
    "properties": {
        "version": {"type": "integer", "minimum": 1},
        "source": {"type": "string"},
        "rows": {
            "type": "array",
            "items": {
                "type": "array",
                "minItems": 3,
                "maxItems": 3,
                "prefixItems": [
                    {"type": "string", "minLength": 1},
                    {"type": "string", "minLength": 1},
                    {"type": "string", "pattern": "^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$"},
                ],
            },
        },
    },
}


class ThemeTable:
    """Immutable ``(theme_name, rule, value)`` rows grouped by theme.

    Rows are validated on construction: a theme may not repeat a rule, rules
    must be known, and every theme needs ``background`` and ``base_text``.
    With ``require_complete`` (the default) every theme must also define all
    five palette rules.
    """

    __slots__ = ("_rows", "_records")

    def __init__(self, rows: Iterable[ThemeRow], *, require_complete: bool = True) -> None:
        self._rows: Tuple[ThemeRow, ...] = tuple(rows)
        self._records: Mapping[str, ThemeRecord] = MappingProxyType(
            _group_rows(self._rows, require_complete=require_complete)
        )

    @classmethod
    def from_tuples(
        cls,
        rows: Iterable[Sequence[str]],
        *,
        require_complete: bool = True,
    ) -> "ThemeTable":
        converted: List[ThemeRow] = []
        for index, row in enumerate(rows):
            if len(row) != 3:
                raise CorruptTableError(f"row {index} must have 3 fields, found {len(row)}")
            theme_name, rule, value = row
            try:
                color = normalize_hex(value)
            except (TypeError, ValueError) as exc:
                raise CorruptTableError(
                    f"row {index} has an invalid color {value!r}", theme=theme_name, rule=rule
                ) from exc
            converted.append(ThemeRow(theme_name=theme_name, rule=rule, value=color))
        return cls(converted, require_complete=require_complete)

    @property
    def rows(self) -> Tuple[ThemeRow, ...]:
        return self._rows

    def theme_names(self) -> List[str]:
        return list(self._records.keys())

    def record(self, name: str) -> ThemeRecord:
        return self._records[name]

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __iter__(self) -> Iterator[ThemeRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)


def _group_rows(rows: Sequence[ThemeRow], *, require_complete: bool) -> Dict[str, ThemeRecord]:
    grouped: Dict[str, Dict[str, str]] = {}
    for row in rows:
        if row.rule not in RULES:
            raise CorruptTableError(
                f"unknown rule '{row.rule}' for theme '{row.theme_name}'",
                theme=row.theme_name,
                rule=row.rule,
            )
        colors = grouped.setdefault(row.theme_name, {})
        if row.rule in colors:
            raise CorruptTableError(
                f"theme '{row.theme_name}' defines rule '{row.rule}' more than once",
                theme=row.theme_name,
                rule=row.rule,
            )
        colors[row.rule] = row.value

    required = RULES if require_complete else STRUCTURAL_RULES
    records: Dict[str, ThemeRecord] = {}
    for name, colors in grouped.items():
        for rule in required:
            if rule not in colors:
                raise CorruptTableError(
                    f"theme '{name}' is missing rule '{rule}'", theme=name, rule=rule
                )
        ordered = {rule: colors[rule] for rule in RULES if rule in colors}
        records[name] = ThemeRecord(name=name, colors=MappingProxyType(ordered))
    return records


def load_table(path: Path | str | None = None, *, require_complete: bool = True) -> ThemeTable:
    """Read and validate a theme table from a JSON document."""

    source = Path(path) if path is not None else BUNDLED_TABLE_PATH
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except JSONDecodeError as exc:
        raise CorruptTableError(f"{source.name} is not valid JSON ({exc.msg}, line {exc.lineno})") from exc

    try:
        jsonschema.validate(payload, TABLE_SCHEMA)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise CorruptTableError(f"{source.name} failed validation at {location}: {exc.message}") from exc

    table = ThemeTable.from_tuples(payload["rows"], require_complete=require_complete)
    LOGGER.debug(
        "Loaded theme table from %s: %d rows, %d themes", source, len(table.rows), len(table)
    )
    return table


@lru_cache(maxsize=1)
def bundled_table() -> ThemeTable:
    """Return the process-wide table shipped with the package."""

    return load_table(BUNDLED_TABLE_PATH)

