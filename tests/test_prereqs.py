"""Tests for tool prerequisite helpers."""
import pytest


def _bounds(name):
    from geo_compare.core.bounds import fallback_bounds
    return fallback_bounds(name, (0.0, 0.0))


def test_require_state_raises_when_base_not_set():
    from geo_compare.tools._prereqs import require_state
    from geo_compare.state import SessionState

    with pytest.raises(ValueError, match="base"):
        require_state(SessionState(), base=True)


def test_require_state_raises_when_overlay_not_set():
    from geo_compare.tools._prereqs import require_state
    from geo_compare.state import SessionState

    mock_state = SessionState()
    mock_state.base = _bounds("Austin")
    with pytest.raises(ValueError, match="overlay"):
        require_state(mock_state, base=True, overlay=True)


def test_require_state_passes_when_both_set():
    from geo_compare.tools._prereqs import require_state
    from geo_compare.state import SessionState

    mock_state = SessionState()
    mock_state.base = _bounds("Austin")
    mock_state.overlay = _bounds("Paris")
    # Should not raise
    require_state(mock_state, base=True, overlay=True)


def test_require_state_no_requirements():
    from geo_compare.tools._prereqs import require_state
    from geo_compare.state import SessionState

    require_state(SessionState())
