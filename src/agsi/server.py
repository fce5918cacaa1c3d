"""MCP server for AGSi documents.

Registers all tools and runs via stdio transport.
"""

import logging

from mcp.server.fastmcp import FastMCP

from .tools.validate import register_validate_tools
from .tools.materials import register_material_tools
from .tools.info import register_info_tools
from .tools.convert import register_convert_tools

mcp = FastMCP(
    "agsi",
    instructions=(
        "Inspect, validate and convert AGSi ground model files: materials, "
        "model components and their geometry"
    ),
)

# Register all tool groups
register_validate_tools(mcp)
register_material_tools(mcp)
register_info_tools(mcp)
register_convert_tools(mcp)


def main():
    # stdout carries the protocol; logs go to stderr
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
