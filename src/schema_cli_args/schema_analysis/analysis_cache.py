"""Identity-keyed memoisation of schema analyses."""

from __future__ import annotations

import itertools
from dataclasses import dataclass

from schema_cli_args.schema_model.shape_nodes import Shape

from .analysis_models import AnalyzeOptions, SchemaAnalysis


@dataclass(frozen=True)
class SchemaKey:
    """Stable identifier assigned to a schema object when it is first registered."""

    value: int


@dataclass(frozen=True)
class _CacheEntry:
    options: AnalyzeOptions
    analysis: SchemaAnalysis


class AnalysisCache:
    """Keeps the last analysis computed for each registered schema object.

    Schemas are matched by identity, never by content, and entries are only
    dropped through :meth:`invalidate` or :meth:`clear`. Schema objects must not
    be mutated after their first analysis. Concurrent writers for the same
    schema simply overwrite each other with equal results.
    """

    def __init__(self) -> None:
        self._registered: dict[int, tuple[Shape, SchemaKey]] = {}
        self._entries: dict[SchemaKey, _CacheEntry] = {}
        self._sequence = itertools.count(1)

    def register(self, schema: Shape) -> SchemaKey:
        """Return the schema's key, assigning a new one on first sight."""
        known = self._registered.get(id(schema))
        if known is not None and known[0] is schema:
            return known[1]
        key = SchemaKey(next(self._sequence))
        self._registered[id(schema)] = (schema, key)
        return key

    def get(self, schema: Shape, options: AnalyzeOptions) -> SchemaAnalysis | None:
        """Return the cached analysis when it was computed with equal options."""
        key = self._lookup_key(schema)
        if key is None:
            return None
        entry = self._entries.get(key)
        if entry is None or entry.options != options:
            return None
        return entry.analysis

    def put(self, schema: Shape, options: AnalyzeOptions, analysis: SchemaAnalysis) -> SchemaKey:
        key = self.register(schema)
        self._entries[key] = _CacheEntry(options=options, analysis=analysis)
        return key

    def invalidate(self, schema: Shape) -> bool:
        """Forget the schema and its analysis. Returns True when something was removed."""
        known = self._registered.get(id(schema))
        if known is None or known[0] is not schema:
            return False
        del self._registered[id(schema)]
        self._entries.pop(known[1], None)
        return True

    def clear(self) -> None:
        self._registered.clear()
        self._entries.clear()

    def _lookup_key(self, schema: Shape) -> SchemaKey | None:
        known = self._registered.get(id(schema))
        if known is None or known[0] is not schema:
            return None
        return known[1]

    def __contains__(self, schema: object) -> bool:
        if not isinstance(schema, Shape):
            return False
        key = self._lookup_key(schema)
        return key is not None and key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
