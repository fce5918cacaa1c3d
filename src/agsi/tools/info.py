"""Document overview tools: agsi_get_info, agsi_stats, agsi_diff."""

import json

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..core.compare import diff_documents, document_stats
from ..errors import AgsiError
from ._loading import load_document


def register_info_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def agsi_get_info(file_path: str) -> str:
        """Get file metadata, project and per-model counts for an AGSi document.

        Args:
            file_path: Path to the AGSi JSON file
        """
        try:
            doc = load_document(file_path)
        except (AgsiError, ValueError) as e:
            return f"Error: {e}"
        return json.dumps(doc.summary(), indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def agsi_stats(file_path: str) -> str:
        """Summarise material and component statistics of an AGSi document.

        Args:
            file_path: Path to the AGSi JSON file
        """
        try:
            doc = load_document(file_path)
        except (AgsiError, ValueError) as e:
            return f"Error: {e}"
        return json.dumps(document_stats(doc), indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def agsi_diff(file_path_a: str, file_path_b: str, detailed: bool = False) -> str:
        """Compare two AGSi documents.

        Args:
            file_path_a: The original document
            file_path_b: The document to compare against it
            detailed: Also compare model ids/names and materials by id
        """
        try:
            old = load_document(file_path_a)
            new = load_document(file_path_b)
        except (AgsiError, ValueError) as e:
            return f"Error: {e}"

        differences = diff_documents(old, new, detailed=detailed)
        return json.dumps({
            "identical": not differences,
            "differences": differences,
        }, indent=2)
