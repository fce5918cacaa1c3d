"""Document loading helpers for MCP tools."""

from ..models import Document, GroundModel
from ..errors import ModelNotFoundError


def load_document(file_path: str) -> Document:
    """Read a JSON document, raising an AgsiError with a descriptive message.

    Usage in a tool:
        try:
            doc = load_document(file_path)
        except AgsiError as e:
            return f"Error: {e}"
    """
    if not file_path:
        raise ValueError("file_path is required.")
    return Document.from_json_file(file_path)


def select_model(doc: Document, model_id: str | None = None) -> GroundModel:
    """Pick the named model, or the only model when no id is given."""
    if model_id:
        model = doc.get_model(model_id)
        if model is None:
            raise ModelNotFoundError(model_id)
        return model
    if len(doc.agsi_model) == 1:
        return doc.agsi_model[0]
    if not doc.agsi_model:
        raise ValueError("Document contains no ground models.")
    available = ", ".join(m.id for m in doc.agsi_model)
    raise ValueError(f"Multiple models found. Please specify model_id. Available: {available}")
