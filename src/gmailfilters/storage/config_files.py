"""YAML read/write for the local filters and labels files."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import fields
from pathlib import Path
from typing import Any, TypeVar

import yaml

from gmailfilters.core.exceptions import FileFormatError
from gmailfilters.core.models import Filter, FilterAction, FilterCriteria, Label
from gmailfilters.core.validation import validate_filter, validate_label

logger = logging.getLogger(__name__)

T = TypeVar("T", FilterCriteria, FilterAction, Label)

# Label keys written even when empty, so exported files are self-describing.
_ALWAYS_WRITTEN = {"id", "name", "type"}


def _read_document(path: Path, root_key: str, *, required: bool) -> list[Any]:
    """Load ``path`` and return the list stored under ``root_key``."""
    if not path.exists():
        if required:
            raise FileFormatError(f"reading file {path} failed: file does not exist")
        return []

    text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise FileFormatError(f"decoding {path} failed: {e}") from e

    if data is None:
        return []
    if not isinstance(data, dict):
        raise FileFormatError(f"{path}: top level must be a mapping with a {root_key!r} key")
    unknown = set(data) - {root_key}
    if unknown:
        raise FileFormatError(f"{path}: undecoded fields found: {sorted(unknown)}")

    records = data.get(root_key) or []
    if not isinstance(records, list):
        raise FileFormatError(f"{path}: {root_key!r} must be a list")
    return records


def _decode_record(cls: type[T], raw: Any, where: str) -> T:
    """Build ``cls`` from a mapping keyed by the field metadata keys.

    Unknown keys and values of the wrong type are rejected.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise FileFormatError(f"{where}: expected a mapping, got {type(raw).__name__}")

    by_key = {f.metadata["key"]: f for f in fields(cls)}
    unknown = set(raw) - set(by_key)
    if unknown:
        raise FileFormatError(f"{where}: undecoded fields found: {sorted(unknown)}")

    values: dict[str, Any] = {}
    for key, value in raw.items():
        f = by_key[key]
        expected = type(f.default)
        # bool is a subclass of int; keep them apart.
        if type(value) is not expected:
            raise FileFormatError(
                f"{where}: field {key!r} must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        values[f.name] = value
    return cls(**values)


def _encode_record(record: FilterCriteria | FilterAction | Label) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in fields(record):
        value = getattr(record, f.name)
        key = f.metadata["key"]
        if value or (isinstance(record, Label) and key in _ALWAYS_WRITTEN):
            out[key] = value
    return out


def _write_document(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8"
    )


def load_filters(path: Path) -> list[Filter]:
    """Decode and validate a filters file.

    Raises:
        FileFormatError: If the file is missing, malformed, or has unknown fields.
        RecordValidationError: If any filter is invalid.
    """
    filters: list[Filter] = []
    for index, raw in enumerate(_read_document(path, "filters", required=True)):
        where = f"{path}: filter #{index}"
        if not isinstance(raw, dict):
            raise FileFormatError(f"{where}: expected a mapping")
        unknown = set(raw) - {"criteria", "action"}
        if unknown:
            raise FileFormatError(f"{where}: undecoded fields found: {sorted(unknown)}")
        f = Filter(
            criteria=_decode_record(FilterCriteria, raw.get("criteria"), f"{where} criteria"),
            action=_decode_record(FilterAction, raw.get("action"), f"{where} action"),
        )
        validate_filter(f, index)
        filters.append(f)

    logger.debug("Decoded %d filters from %s", len(filters), path)
    return filters


def load_labels(path: Path) -> list[Label]:
    """Decode and validate a labels file. A missing file holds no labels."""
    labels: list[Label] = []
    for index, raw in enumerate(_read_document(path, "labels", required=False)):
        label = _decode_record(Label, raw, f"{path}: label #{index}")
        validate_label(label, index)
        labels.append(label)

    logger.debug("Decoded %d labels from %s", len(labels), path)
    return labels


def dump_filters(path: Path, filters: Sequence[Filter]) -> None:
    """Write filters in the given order."""
    _write_document(
        path,
        {
            "filters": [
                {
                    "criteria": _encode_record(f.criteria),
                    "action": _encode_record(f.action),
                }
                for f in filters
            ]
        },
    )


def dump_labels(path: Path, labels: Sequence[Label]) -> None:
    """Write labels in the given order."""
    _write_document(path, {"labels": [_encode_record(label) for label in labels]})
