"""Requiredness validation over flattened fields."""

from __future__ import annotations

from collections.abc import Collection, Iterable

from schema_cli_args.flattening.field_models import FlattenedField

from .analysis_models import RequiredFieldsResult


def validate_required_fields(
    flattened_fields: Iterable[FlattenedField],
    provided: Collection[str] | None = None,
) -> RequiredFieldsResult:
    """Collect required flat keys and, when ``provided`` is given, the missing ones."""
    required = tuple(field.flat_key for field in flattened_fields if not field.optional)
    missing = () if provided is None else tuple(key for key in required if key not in provided)
    return RequiredFieldsResult(is_valid=not missing, required=required, missing=missing)
