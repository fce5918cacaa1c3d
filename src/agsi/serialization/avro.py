"""Avro object container encoding of a single document.

The document is dumped to its generic JSON form, mapped field by field onto
the record schema and written as the only record of a container. Schema
fields marked ``"agsi.encoding": "json"`` carry JSON text (geometry and the
open metadata maps); the field marked ``"agsi.extras"`` collects top-level
keys the schema does not name, so document extensions survive the trip.
"""

import copy
import io
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

import fastavro

from ..errors import AgsiIOError, DeserializationError, SerializationError
from ..models import Document

logger = logging.getLogger(__name__)

JSON_ENCODED = "agsi.encoding"
EXTRAS = "agsi.extras"


def load_avro_schema(path: str | Path | None = None) -> dict:
    """Load a schema definition, by default the one shipped with the package."""
    try:
        if path is None:
            text = resources.files("agsi.serialization").joinpath("schemas/agsi.avsc").read_text("utf-8")
        else:
            text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise AgsiIOError(f"Failed to read Avro schema: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"Failed to parse Avro schema: {exc}") from exc


def _to_avro(value: Any, schema: Any) -> Any:
    if isinstance(schema, list):
        if value is None:
            return None
        branches = [s for s in schema if s != "null"]
        if len(branches) == 1:
            return _to_avro(value, branches[0])
        # Ambiguous unions of plain values are resolved by the writer.
        return value
    if isinstance(schema, dict):
        kind = schema.get("type")
        if kind == "record":
            return _record_to_avro(value, schema)
        if kind == "array":
            return [_to_avro(item, schema["items"]) for item in value]
        if kind == "map":
            return {k: _to_avro(v, schema["values"]) for k, v in value.items()}
    return value


def _record_to_avro(value: dict, schema: dict) -> dict:
    known = {f["name"] for f in schema["fields"] if not f.get(EXTRAS)}
    record = {}
    for field in schema["fields"]:
        name = field["name"]
        if field.get(EXTRAS):
            raw = {k: v for k, v in value.items() if k not in known}
        else:
            raw = value.get(name)
        if field.get(JSON_ENCODED):
            record[name] = json.dumps(raw)
        else:
            record[name] = _to_avro(raw, field["type"])
    return record


def _from_avro(value: Any, schema: Any) -> Any:
    if isinstance(schema, list):
        if value is None:
            return None
        branches = [s for s in schema if s != "null"]
        if len(branches) == 1:
            return _from_avro(value, branches[0])
        return value
    if isinstance(schema, dict):
        kind = schema.get("type")
        if kind == "record":
            return _record_from_avro(value, schema)
        if kind == "array":
            return [_from_avro(item, schema["items"]) for item in value]
        if kind == "map":
            return {k: _from_avro(v, schema["values"]) for k, v in value.items()}
    return value


def _record_from_avro(record: dict, schema: dict) -> dict:
    value = {}
    extras = {}
    for field in schema["fields"]:
        name = field["name"]
        raw = record.get(name)
        if field.get(JSON_ENCODED):
            decoded = json.loads(raw) if raw is not None else None
        else:
            decoded = _from_avro(raw, field["type"])
        if field.get(EXTRAS):
            extras = decoded or {}
        else:
            value[name] = decoded
    value.update(extras)
    return value


def encode_avro(doc: Document, schema: dict | None = None) -> bytes:
    raw_schema = schema if schema is not None else load_avro_schema()
    try:
        parsed = fastavro.parse_schema(copy.deepcopy(raw_schema))
    except Exception as exc:
        raise SerializationError(f"Failed to parse Avro schema: {exc}") from exc

    try:
        record = _to_avro(doc.model_dump(mode="json", by_alias=True), raw_schema)
    except (KeyError, TypeError, AttributeError) as exc:
        raise SerializationError(f"Failed to convert to Avro: {exc}") from exc

    buf = io.BytesIO()
    try:
        fastavro.writer(buf, parsed, [record])
    except Exception as exc:
        raise SerializationError(f"Failed to write Avro: {exc}") from exc

    data = buf.getvalue()
    logger.debug("Encoded %s as Avro (%d bytes)", doc.ags_file.file_id, len(data))
    return data


def decode_avro(data: bytes, schema: dict | None = None) -> Document:
    """Read the first record of a container back into a Document."""
    raw_schema = schema if schema is not None else load_avro_schema()
    try:
        records = iter(fastavro.reader(io.BytesIO(data)))
        first = next(records, None)
        more = first is not None and next(records, None) is not None
    except Exception as exc:
        raise DeserializationError(f"Failed to read Avro: {exc}") from exc

    if first is None:
        raise DeserializationError("No records found in Avro data")
    if more:
        logger.warning("Avro container holds more than one record; only the first is read")

    try:
        value = _from_avro(first, raw_schema)
    except (KeyError, TypeError, AttributeError, json.JSONDecodeError) as exc:
        raise DeserializationError(f"Failed to convert from Avro: {exc}") from exc
    return Document.from_dict(value)
