"""Author, validate and interchange AGSi ground model documents."""

from .config import AGSI_VERSION, PACKAGE_VERSION as __version__
from .core import geometry
from .core.validation import ValidationReport, validate_document, validate_or_raise
from .errors import (
    AgsiError,
    AgsiIOError,
    DeserializationError,
    DocumentValidationError,
    GeometryError,
    JsonError,
    MaterialNotFoundError,
    ModelNotFoundError,
    SerializationError,
    UnsupportedFormatError,
)
from .models import (
    Document,
    GroundModel,
    Material,
    MaterialProperty,
    ModelComponent,
    ModelExtent,
    Project,
)
from .serialization import Format, deserialize, parse_format, serialize

__all__ = [
    "AGSI_VERSION",
    "__version__",
    "geometry",
    "Document",
    "GroundModel",
    "Material",
    "MaterialProperty",
    "ModelComponent",
    "ModelExtent",
    "Project",
    "ValidationReport",
    "validate_document",
    "validate_or_raise",
    "Format",
    "parse_format",
    "serialize",
    "deserialize",
    "AgsiError",
    "AgsiIOError",
    "DeserializationError",
    "DocumentValidationError",
    "GeometryError",
    "JsonError",
    "MaterialNotFoundError",
    "ModelNotFoundError",
    "SerializationError",
    "UnsupportedFormatError",
]
