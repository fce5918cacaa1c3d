"""Validation tool: agsi_validate."""

import json

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..core.validation import validate_document
from ..errors import AgsiError
from ._loading import load_document


def register_validate_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def agsi_validate(file_path: str) -> str:
        """Validate an AGSi file.

        Checks required fields, duplicate model and material ids, component
        material references and model extents.

        Args:
            file_path: Path to the AGSi JSON file
        """
        try:
            doc = load_document(file_path)
        except (AgsiError, ValueError) as e:
            return f"Error: {e}"

        report = validate_document(doc)
        return json.dumps({
            "valid": report.is_valid,
            "errors": [
                {"path": e.path, "message": e.message, "type": e.kind}
                for e in report.errors
            ],
            "warnings": [
                {"path": w.path, "message": w.message}
                for w in report.warnings
            ],
            "report": report.render(),
        }, indent=2)
