"""Administrative boundary fetching via Overpass API."""

import logging

import httpx

from geo_compare.models import BoundaryRequest
from .errors import UpstreamTransportError

logger = logging.getLogger(__name__)

OVERPASS_SERVERS = [
    "https://overpass-api.de/api/interpreter",
    "https://overpass.kumi.systems/api/interpreter",
    "https://overpass.openstreetmap.ru/api/interpreter",
]

USER_AGENT = "geo-compare/1.0"

# Boundary queries routinely take 10-30s; leave headroom over the server-side limit
QUERY_TIMEOUT_S = 120
CLIENT_TIMEOUT_S = 150.0

DEFAULT_ADMIN_LEVELS = (8, 6, 4)  # city, county, state


def _relation_query(relation_id: int) -> str:
    return (
        f"[out:json][timeout:{QUERY_TIMEOUT_S}];"
        f"(rel({relation_id});way(r);node(w););"
        "out geom;"
    )


def build_overpass_query(request: BoundaryRequest) -> str:
    """Build the Overpass QL for one location.

    A known relation id is queried directly. Otherwise the query is broadened
    over common name variants and admin levels, which can match several
    relations; the pipeline then keeps the one with the most members.
    """
    if request.relation_id is not None:
        return _relation_query(request.relation_id)
    if request.osm_id is not None and request.osm_type == "relation":
        return _relation_query(request.osm_id)

    name = request.name
    country = f'["ISO3166-1"="{request.country}"]' if request.country else ""
    variants = [
        f'"{name}"',
        f'"City of {name}"',
        f'"{name} City"',
        f'"{name} Metropolitan"',
        f'"{name} Metro"',
        f'"Greater {name}"',
    ]
    levels = [request.admin_level] if request.admin_level else list(DEFAULT_ADMIN_LEVELS)

    clauses = []
    for level in levels:
        admin = f'["type"="boundary"]["boundary"="administrative"]["admin_level"="{level}"]'
        for variant in variants:
            clauses.append(f'rel["name"={variant}]{admin}{country}')
            clauses.append(f'rel["name"~"{name}",i]{admin}{country}')

    for pattern in (name, f"{name} Metropolitan", f"{name} Metro", f"Greater {name}"):
        clauses.append(f'rel["name"~"{pattern}",i]["type"="boundary"]{country}')

    unique = list(dict.fromkeys(clauses))
    return (
        f"[out:json][timeout:{QUERY_TIMEOUT_S}];"
        f"({';'.join(unique)};);"
        "(._;>;);"
        "out geom;"
    )


async def _query_overpass(query: str) -> dict:
    """Execute an Overpass API query with server fallback.

    Raises:
        UpstreamTransportError: every server failed; carries the last HTTP status seen.
    """
    last_status = None
    async with httpx.AsyncClient(timeout=CLIENT_TIMEOUT_S, headers={"User-Agent": USER_AGENT}) as client:
        for server in OVERPASS_SERVERS:
            try:
                response = await client.post(server, data={"data": query})
                response.raise_for_status()
                return response.json()
            except httpx.TimeoutException as exc:
                logger.warning("Overpass server %s timed out: %s", server, exc)
                continue
            except httpx.HTTPStatusError as exc:
                last_status = exc.response.status_code
                logger.warning("Overpass server %s returned HTTP %s", server, last_status)
                continue
            except httpx.HTTPError as exc:
                logger.warning("Overpass server %s failed: %s", server, exc)
                continue
    logger.warning("All Overpass servers failed for query")
    raise UpstreamTransportError(last_status)


async def fetch_boundary_elements(request: BoundaryRequest) -> dict:
    """Fetch the raw ``{"elements": [...]}`` payload for one location."""
    query = build_overpass_query(request)
    logger.debug("Overpass query for %s: %s", request.name, query)
    payload = await _query_overpass(query)
    logger.info(
        "Overpass returned %d elements for %s", len(payload.get("elements") or []), request.name
    )
    return payload
