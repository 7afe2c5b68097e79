"""Index a flat Overpass element list by id."""

from pydantic import BaseModel, Field

from geo_compare.models import OsmNode, OsmWay, OsmRelation


class ElementIndex(BaseModel):
    nodes: dict[int, OsmNode] = Field(default_factory=dict)
    ways: dict[int, OsmWay] = Field(default_factory=dict)
    relations: list[OsmRelation] = Field(default_factory=list)


def index_elements(elements: list[dict]) -> ElementIndex:
    """Build node and way lookups plus the relation list in one pass.

    References are not checked here; a way pointing at a missing node simply
    fails to resolve later on.
    """
    index = ElementIndex()
    for element in elements:
        elem_type = element.get("type")
        if elem_type == "node":
            node = OsmNode(id=element["id"], lat=element["lat"], lon=element["lon"])
            index.nodes[node.id] = node
        elif elem_type == "way":
            way = OsmWay(
                id=element["id"],
                nodes=element.get("nodes") or [],
                geometry=element.get("geometry") or [],
                tags=element.get("tags") or {},
            )
            index.ways[way.id] = way
        elif elem_type == "relation":
            index.relations.append(OsmRelation(
                id=element["id"],
                members=element.get("members") or [],
                tags=element.get("tags") or {},
            ))
    return index
