"""Protocol Buffers placeholder.

There is no generated message code for the AGSi .proto definition, so both
directions fail with a descriptive error.
"""

from ..errors import DeserializationError, SerializationError
from ..models import Document


def encode_protobuf(doc: Document) -> bytes:
    raise SerializationError(
        "Protobuf serialization requires code generated from the AGSi .proto definition, "
        "which is not available"
    )


def decode_protobuf(data: bytes) -> Document:
    raise DeserializationError(
        "Protobuf deserialization requires code generated from the AGSi .proto definition, "
        "which is not available"
    )
