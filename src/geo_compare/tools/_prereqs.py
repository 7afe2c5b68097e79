"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, base: bool = False, overlay: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(state, base=True, overlay=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if base and state.base is None:
        raise ValueError(
            "Select a base location first with select_location(role='base')."
        )
    if overlay and state.overlay is None:
        raise ValueError(
            "Select an overlay location first with select_location(role='overlay')."
        )
