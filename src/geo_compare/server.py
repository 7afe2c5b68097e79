"""MCP server for geo-compare.

Registers all tools and runs via stdio transport.
"""

from mcp.server.fastmcp import FastMCP

from .tools.boundaries import register_boundary_tools
from .tools.compare import register_compare_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "geo-compare",
    instructions="Fetch administrative boundaries from OpenStreetMap and overlay one on another at equal area",
)

# Register all tool groups
register_boundary_tools(mcp)
register_compare_tools(mcp)
register_status_tools(mcp)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
