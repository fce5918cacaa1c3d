"""JSON encoding, pretty and compact."""

import logging

from pydantic_core import PydanticSerializationError

from ..errors import SerializationError
from ..models import Document

logger = logging.getLogger(__name__)


def encode_json(doc: Document, pretty: bool = True) -> bytes:
    try:
        data = doc.to_json_string(pretty=pretty).encode("utf-8")
    except PydanticSerializationError as exc:
        raise SerializationError(f"Failed to encode JSON: {exc}") from exc
    logger.debug("Encoded %s as %s JSON (%d bytes)", doc.ags_file.file_id,
                 "pretty" if pretty else "compact", len(data))
    return data


def decode_json(data: bytes) -> Document:
    return Document.from_json_str(data)
