# This file collapses flat rows from one-to-many joins into parent objects with child collections.
# Rows are aggregated by the parent key in a single pass, so the join does not need to return
# them adjacent; parents and children keep their first-seen order.

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any, TypeVar

from src.pagination.errors import MalformedRowError

P = TypeVar("P")

Row = Mapping[str, Any]
ChildMapper = Callable[[Row], Any | None]
ChildKey = Callable[[Row], Hashable]
ParentMapper = Callable[[Row, dict[str, list[Any]]], P]


def group_rows(
    rows: Iterable[Row],
    parent_key: str,
    parent_mapper: ParentMapper[P],
    child_mappers: Mapping[str, ChildMapper] | None = None,
    child_keys: Mapping[str, ChildKey] | None = None,
) -> list[P]:
    """Group joined rows by `parent_key` and build one parent per distinct key.

    Each child mapper returns None for rows whose left-joined columns are
    all null; such rows add nothing to that relation. Every other row adds
    one child, unless `child_keys` names an identity for the relation: a
    child whose key was already seen in the group is then skipped. That is
    how repeats from the cross product of several left joins are dropped.
    `parent_mapper` receives the first row seen for the key and the
    collected children by relation name.
    """

    relations = dict(child_mappers or {})
    identities = dict(child_keys or {})
    unknown = set(identities) - set(relations)
    if unknown:
        raise ValueError(f"child_keys name relations without a mapper: {sorted(unknown)}")

    first_rows: dict[Any, Row] = {}
    children_by_key: dict[Any, dict[str, list[Any]]] = {}
    seen_by_key: dict[Any, dict[str, set[Hashable]]] = {}

    for row in rows:
        try:
            key = row[parent_key]
        except KeyError as exc:
            raise MalformedRowError(
                f"Row is missing grouping column {parent_key!r}; columns: {sorted(row.keys())}"
            ) from exc

        if key not in first_rows:
            first_rows[key] = row
            children_by_key[key] = {name: [] for name in relations}
            seen_by_key[key] = {name: set() for name in identities}

        group = children_by_key[key]
        for name, mapper in relations.items():
            child = mapper(row)
            if child is None:
                continue
            if name in identities:
                identity = identities[name](row)
                seen = seen_by_key[key][name]
                if identity in seen:
                    continue
                seen.add(identity)
            group[name].append(child)

    return [parent_mapper(row, children_by_key[key]) for key, row in first_rows.items()]
