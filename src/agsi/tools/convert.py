"""Format conversion tool: agsi_convert."""

import logging
import os

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..errors import AgsiError
from ..serialization import parse_format, write_as
from ._loading import load_document

logger = logging.getLogger(__name__)


def register_convert_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def agsi_convert(input_path: str, output_path: str, format: str = "json") -> str:
        """Convert an AGSi JSON file to another wire format.

        Args:
            input_path: AGSi JSON file to read
            output_path: Where to write the converted file (overwritten if present)
            format: json, json-compact, avro or protobuf
        """
        # Reject unknown names before touching any file.
        try:
            fmt = parse_format(format)
        except ValueError as e:
            return f"Error: {e}"

        try:
            doc = load_document(input_path)
            os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
            size = write_as(doc, output_path, fmt)
        except (AgsiError, ValueError, OSError) as e:
            return f"Error: {e}"

        logger.info("Converted %s to %s (%s)", input_path, output_path, fmt.value)
        return f"Converted {input_path} to {output_path} ({fmt.value}, {size} bytes)"
