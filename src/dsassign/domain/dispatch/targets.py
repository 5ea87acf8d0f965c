"""Resolve a caller's target spec into one value per connection."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Final

from dsassign.domain.errors import ResolutionError

if TYPE_CHECKING:
    from collections.abc import Iterable

SERVER_COLUMN: Final[str] = "server"


def resolve_targets(
    names: Sequence[str],
    spec: object,
    *,
    value_column: str,
) -> dict[str, object]:
    """Return ``{connection name: target}`` in the order of ``names``.

    Accepted shapes of ``spec``:

    * a scalar, broadcast to every connection;
    * a vector (non-string sequence of plain values), broadcast as one tuple;
    * a mapping keyed by connection name;
    * a two-column table with a ``server`` column and a ``value_column``
      column, either as a sequence of row mappings or as a column mapping
      ``{"server": [...], value_column: [...]}``.

    Keyed forms must cover exactly the given connections: missing, unknown or
    repeated connection names raise :class:`ResolutionError`.
    """

    if _is_empty(spec):
        raise ResolutionError(f"Not a valid {value_column} name")

    if isinstance(spec, Mapping):
        if SERVER_COLUMN in spec and _is_vector(spec[SERVER_COLUMN]):
            entries = _entries_from_columns(spec, value_column)
        else:
            entries = {str(key): _normalize(value) for key, value in spec.items()}
    elif _is_row_table(spec):
        entries = _entries_from_rows(spec, value_column)  # type: ignore[arg-type]
    else:
        value = _normalize(spec)
        return dict.fromkeys(names, value)

    return _match_connections(names, entries, value_column)


def _is_empty(spec: object) -> bool:
    if spec is None:
        return True
    if isinstance(spec, str):
        return not spec.strip()
    if isinstance(spec, Mapping | Sequence):
        return len(spec) == 0
    return False


def _is_vector(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _is_row_table(spec: object) -> bool:
    if not _is_vector(spec):
        return False
    return all(isinstance(row, Mapping) for row in spec)  # type: ignore[union-attr]


def _normalize(value: object) -> object:
    if _is_vector(value):
        return tuple(value)  # type: ignore[arg-type]
    return value


def _entries_from_rows(
    rows: Sequence[Mapping[str, object]],
    value_column: str,
) -> dict[str, object]:
    for row in rows:
        if SERVER_COLUMN not in row or value_column not in row:
            raise ResolutionError(
                f"Target table requires '{SERVER_COLUMN}' and '{value_column}' columns"
            )
    return _collect(((row[SERVER_COLUMN], row[value_column]) for row in rows), value_column)


def _entries_from_columns(columns: Mapping[str, object], value_column: str) -> dict[str, object]:
    servers = columns[SERVER_COLUMN]
    values = columns.get(value_column)
    if not _is_vector(values):
        raise ResolutionError(
            f"Target table requires '{SERVER_COLUMN}' and '{value_column}' columns"
        )
    if len(servers) != len(values):  # type: ignore[arg-type]
        raise ResolutionError(
            f"Target table columns '{SERVER_COLUMN}' and '{value_column}' differ in length"
        )
    return _collect(zip(servers, values, strict=True), value_column)  # type: ignore[call-overload]


def _collect(pairs: Iterable[tuple[object, object]], value_column: str) -> dict[str, object]:
    entries: dict[str, object] = {}
    for server, value in pairs:
        name = str(server)
        if name in entries:
            raise ResolutionError(f"Duplicate {value_column} entry for server: {name}")
        entries[name] = _normalize(value)
    return entries


def _match_connections(
    names: Sequence[str],
    entries: Mapping[str, object],
    value_column: str,
) -> dict[str, object]:
    missing = [name for name in names if _is_empty(entries.get(name))]
    if missing:
        raise ResolutionError(f"No {value_column} name for server(s): {', '.join(missing)}")

    known = set(names)
    unknown = [name for name in entries if name not in known]
    if unknown:
        raise ResolutionError(
            f"Unknown server(s) in {value_column} spec: {', '.join(sorted(unknown))}"
        )

    return {name: entries[name] for name in names}
