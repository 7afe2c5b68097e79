"""Status tool: get_status."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state


def register_status_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the current comparison state.

        Shows the selected base and overlay, the active quality thresholds,
        and how the last fetch batch went.
        """
        return json.dumps(state.summary(), indent=2)
