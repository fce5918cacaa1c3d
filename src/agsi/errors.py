"""Exception hierarchy for AGSi document handling."""


class AgsiError(Exception):
    """Base class for every error raised by the agsi package."""


class SerializationError(AgsiError):
    pass


class DeserializationError(AgsiError):
    pass


class DocumentValidationError(AgsiError):
    """Raised by validate_or_raise when a document has validation errors."""

    def __init__(self, message: str, report=None):
        super().__init__(message)
        self.report = report


class GeometryError(AgsiError):
    pass


class AgsiIOError(AgsiError):
    """Reading or writing a document file failed."""


class JsonError(AgsiError):
    """The input could not be parsed as JSON at all."""


class ModelNotFoundError(AgsiError):
    def __init__(self, model_id: str):
        super().__init__(f"Model not found: {model_id}")
        self.model_id = model_id


class MaterialNotFoundError(AgsiError):
    def __init__(self, material_id: str):
        super().__init__(f"Material not found: {material_id}")
        self.material_id = material_id


class UnsupportedFormatError(AgsiError, ValueError):
    """An unknown wire format name was supplied."""
