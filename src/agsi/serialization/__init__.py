"""Document encoding to and from the supported wire formats.

The caller always names the format; nothing is auto-detected. Validation is
not run on the way in or out.
"""

from enum import Enum
from pathlib import Path
from typing import Union

from ..errors import AgsiIOError, UnsupportedFormatError
from ..models import Document
from .avro import decode_avro, encode_avro, load_avro_schema
from .json_format import decode_json, encode_json
from .protobuf import decode_protobuf, encode_protobuf


class Format(str, Enum):
    JSON = "json"
    JSON_COMPACT = "json-compact"
    AVRO = "avro"
    PROTOBUF = "protobuf"


_FORMAT_NAMES = {
    "json": Format.JSON,
    "json-pretty": Format.JSON,
    "json-compact": Format.JSON_COMPACT,
    "avro": Format.AVRO,
    "protobuf": Format.PROTOBUF,
    "proto": Format.PROTOBUF,
    "pb": Format.PROTOBUF,
}


def parse_format(name: str) -> Format:
    """Map a user-supplied format name to a Format, rejecting unknown names."""
    try:
        return _FORMAT_NAMES[name.strip().lower()]
    except KeyError:
        raise UnsupportedFormatError(
            f"Unsupported format: {name}. Use json, json-compact, avro, or protobuf"
        ) from None


def serialize(doc: Document, fmt: Format, *, avro_schema: dict | None = None) -> bytes:
    if fmt is Format.JSON:
        return encode_json(doc, pretty=True)
    if fmt is Format.JSON_COMPACT:
        return encode_json(doc, pretty=False)
    if fmt is Format.AVRO:
        return encode_avro(doc, avro_schema)
    if fmt is Format.PROTOBUF:
        return encode_protobuf(doc)
    raise UnsupportedFormatError(f"Unsupported format: {fmt!r}")


def deserialize(data: bytes, fmt: Format, *, avro_schema: dict | None = None) -> Document:
    if fmt in (Format.JSON, Format.JSON_COMPACT):
        return decode_json(data)
    if fmt is Format.AVRO:
        return decode_avro(data, avro_schema)
    if fmt is Format.PROTOBUF:
        return decode_protobuf(data)
    raise UnsupportedFormatError(f"Unsupported format: {fmt!r}")


def read_document(path: Union[str, Path]) -> Document:
    """Read a whole JSON document from disk."""
    return Document.from_json_file(path)


def write_document(doc: Document, path: Union[str, Path]) -> None:
    """Write a whole document to disk as pretty JSON."""
    doc.to_json_file(path)


def write_as(doc: Document, path: Union[str, Path], fmt: Format, **kwargs) -> int:
    """Encode in any format and write the bytes to ``path``; returns the byte count."""
    data = serialize(doc, fmt, **kwargs)
    try:
        Path(path).write_bytes(data)
    except OSError as exc:
        raise AgsiIOError(f"Failed to write {path}: {exc}") from exc
    return len(data)


__all__ = [
    "Format",
    "parse_format",
    "serialize",
    "deserialize",
    "read_document",
    "write_document",
    "write_as",
    "load_avro_schema",
]
