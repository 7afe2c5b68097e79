"""Tests for the MCP tool layer: fetch, thresholds, selection and comparison."""
import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch


def _get_tools():
    from geo_compare.tools.boundaries import register_boundary_tools
    from geo_compare.tools.compare import register_compare_tools
    from geo_compare.tools.status import register_status_tools
    tools = {}
    mock_mcp = MagicMock()
    def capture(**kwargs):
        def decorator(fn):
            tools[fn.__name__] = fn
            return fn
        return decorator
    mock_mcp.tool = capture
    register_boundary_tools(mock_mcp)
    register_compare_tools(mock_mcp)
    register_status_tools(mock_mcp)
    return tools


def _square_elements(x, y, size, relation_id):
    return {"elements": [
        {"type": "way", "id": relation_id * 10, "geometry": [
            {"lat": y, "lon": x}, {"lat": y, "lon": x + size},
            {"lat": y + size, "lon": x + size}, {"lat": y + size, "lon": x},
        ]},
        {"type": "relation", "id": relation_id, "members": [
            {"type": "way", "ref": relation_id * 10, "role": "outer"},
        ]},
    ]}


@pytest.fixture
def fresh_state(tmp_path):
    from geo_compare.core.models import QualityThresholds
    from geo_compare.state import state
    state.base = None
    state.overlay = None
    state.last_results = []
    state.thresholds = QualityThresholds(min_points=0)
    state.store_path = str(tmp_path / "boundaries.json")
    yield state
    state.thresholds = QualityThresholds()
    state.store_path = None


async def _fetch_two_squares(tools):
    async def fetch(request):
        if request.name == "Big":
            return _square_elements(10.0, 10.0, 2.0, 1)
        return _square_elements(0.0, 0.0, 1.0, 2)

    with patch("geo_compare.core.pipeline.fetch_boundary_elements", side_effect=fetch), \
            patch("asyncio.sleep", new_callable=AsyncMock):
        return await tools["fetch_boundaries"](locations=[{"name": "Big"}, {"name": "Small"}])


@pytest.mark.anyio
async def test_fetch_boundaries_reports_results(fresh_state):
    tools = _get_tools()
    output = json.loads(await _fetch_two_squares(tools))
    assert output["success"] is True
    assert [r["name"] for r in output["results"]] == ["Big", "Small"]
    assert output["results"][0]["coordinate_count"] == 5
    assert "error" not in output["results"][0]
    assert "2 successful" in output["message"]
    assert len(fresh_state.last_results) == 2


@pytest.mark.anyio
async def test_fetch_boundaries_reports_failures_per_location(fresh_state):
    tools = _get_tools()
    with patch("geo_compare.core.pipeline.fetch_boundary_elements", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.return_value = {"elements": []}
        output = json.loads(await tools["fetch_boundaries"](locations=[{"name": "Nowhere"}]))
    assert output["results"][0]["success"] is False
    assert output["results"][0]["error"] == "No boundary data found in OSM"


@pytest.mark.anyio
async def test_fetch_boundaries_malformed_request(fresh_state):
    tools = _get_tools()
    result = await tools["fetch_boundaries"](locations=[{"admin_level": 8}])
    assert result.startswith("Error:")


def test_set_quality_thresholds_updates_only_given_values(fresh_state):
    tools = _get_tools()
    result = tools["set_quality_thresholds"](max_polygons=5)
    assert "max_polygons" in result
    assert fresh_state.thresholds.max_polygons == 5
    assert fresh_state.thresholds.min_points == 0


def test_set_quality_thresholds_rejects_invalid(fresh_state):
    tools = _get_tools()
    result = tools["set_quality_thresholds"](max_fragmentation_ratio=2.0)
    assert result.startswith("Error:")
    assert fresh_state.thresholds.max_fragmentation_ratio == 0.8


def test_get_boundary_not_found(fresh_state):
    tools = _get_tools()
    assert "not found" in tools["get_boundary"](name="Atlantis")


@pytest.mark.anyio
async def test_get_boundary_returns_location_bounds(fresh_state):
    tools = _get_tools()
    await _fetch_two_squares(tools)
    data = json.loads(tools["get_boundary"](name="Big, Somewhere"))
    assert data["center"] == [11.0, 11.0]
    assert data["bbox"] == [10.0, 10.0, 12.0, 12.0]
    assert data["boundary"]["properties"]["name"] == "Big"
    assert data["coordinate_count"] == 5


def test_compare_requires_both_locations(fresh_state):
    tools = _get_tools()
    assert tools["compare_locations"]().startswith("Error:")


def test_select_location_unknown_without_fallback(fresh_state):
    tools = _get_tools()
    result = tools["select_location"](role="base", name="Atlantis")
    assert result.startswith("Error:")
    assert fresh_state.base is None


def test_select_location_fallback_circle(fresh_state):
    tools = _get_tools()
    result = tools["select_location"](role="overlay", name="Atlantis", lat=10.0, lon=20.0)
    assert "approximate" in result
    assert fresh_state.overlay.center == (20.0, 10.0)
    assert fresh_state.overlay.coordinate_count == 33


@pytest.mark.anyio
async def test_compare_locations_overlays_small_on_big(fresh_state):
    tools = _get_tools()
    await _fetch_two_squares(tools)
    tools["select_location"](role="base", name="Big")
    tools["select_location"](role="overlay", name="Small")

    output = json.loads(tools["compare_locations"]())
    assert output["scale_ratio"] == pytest.approx(2.0)
    feature = output["feature"]
    assert feature["type"] == "Feature"
    assert feature["properties"]["center"] == [11.0, 11.0]
    ring = feature["geometry"]["coordinates"][0][0]
    assert ring[0] == pytest.approx([10.0, 10.0])
    assert ring[2] == pytest.approx([12.0, 12.0])


def test_get_status_summary(fresh_state):
    tools = _get_tools()
    status = json.loads(tools["get_status"]())
    assert status["base"] == {"selected": False}
    assert status["thresholds"]["min_points"] == 0
    assert status["store_path"] == fresh_state.store_path
