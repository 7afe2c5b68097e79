"""Relation member extraction: resolve way members into coordinate fragments."""

import logging

from geo_compare.models import OsmNode, OsmWay, OsmRelation
from .elements import ElementIndex

logger = logging.getLogger(__name__)

OUTER_ROLES = ("outer", "")
INNER_ROLES = ("inner",)


def select_relation(relations: list[OsmRelation]) -> OsmRelation | None:
    """Pick the relation with the most members (earliest wins a tie)."""
    if not relations:
        return None
    return max(relations, key=lambda rel: len(rel.members))


def way_coordinates(way: OsmWay, nodes: dict[int, OsmNode]) -> list[list[float]]:
    """Return ``[lon, lat]`` pairs for a way.

    Inline geometry wins when present; otherwise node references are resolved
    through ``nodes`` and unresolvable ones are dropped.
    """
    inline = [pt for pt in way.geometry if pt is not None]
    if inline:
        return [[pt.lon, pt.lat] for pt in inline]

    coords = []
    for node_id in way.nodes:
        node = nodes.get(node_id)
        if node is not None:
            coords.append([node.lon, node.lat])
    return coords


def extract_fragments(
    relation: OsmRelation, index: ElementIndex,
) -> tuple[list[list[list[float]]], list[list[list[float]]]]:
    """Split a relation's way members into outer and inner fragments.

    Returns:
        (outer_fragments, inner_fragments), each in member order.
    """
    outer: list[list[list[float]]] = []
    inner: list[list[list[float]]] = []

    for member in relation.members:
        if member.type != "way":
            continue
        way = index.ways.get(member.ref)
        if way is None:
            logger.debug("Way %s not found in element index", member.ref)
            continue

        coords = way_coordinates(way, index.nodes)
        if len(coords) < 2:
            logger.debug("Way %s has only %d usable coordinates", member.ref, len(coords))
            continue

        if member.role in OUTER_ROLES:
            outer.append(coords)
        elif member.role in INNER_ROLES:
            inner.append(coords)

    logger.debug(
        "Relation %s: %d outer and %d inner fragments", relation.id, len(outer), len(inner)
    )
    return outer, inner
