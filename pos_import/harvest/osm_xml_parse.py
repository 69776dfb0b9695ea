"""Parse OSM API node XML into an ``OsmNode``.

Expected shape::

    <osm>
      <node id="5589879349" lat="49.4110" lon="8.7100">
        <tag k="name" v="Rada Coffee"/>
        <tag k="amenity" v="cafe"/>
      </node>
    </osm>
"""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET

from pos_import.common.errors import FetchFailure, NodeNotFoundError
from pos_import.common.models import OsmNode

logger = logging.getLogger(__name__)


def _find_node_element(root: ET.Element) -> ET.Element | None:
    if root.tag == "node":
        return root
    return root.find(".//node")


def _parse_coordinate(element: ET.Element, attribute: str, node_id: int) -> float:
    raw = element.get(attribute)
    if raw is None or not raw.strip():
        logger.warning("Missing %s attribute in OSM node %s", attribute, node_id)
        raise NodeNotFoundError(node_id, FetchFailure.INVALID_COORDINATE, f"missing {attribute}")
    try:
        value = float(raw)
    except ValueError as exc:
        logger.warning("Invalid %s value %r in OSM node %s", attribute, raw, node_id)
        raise NodeNotFoundError(node_id, FetchFailure.INVALID_COORDINATE, f"invalid {attribute}") from exc
    if not math.isfinite(value):
        raise NodeNotFoundError(node_id, FetchFailure.INVALID_COORDINATE, f"non-finite {attribute}")
    return value


def extract_tags(node_element: ET.Element) -> dict[str, str]:
    # Later duplicates overwrite earlier ones.
    tags: dict[str, str] = {}
    for tag_element in node_element.iter("tag"):
        key = tag_element.get("k")
        value = tag_element.get("v")
        if key and value:
            tags[key] = value
    return tags


def parse_node_xml(raw_xml: str, node_id: int) -> OsmNode:
    try:
        root = ET.fromstring(raw_xml)
    except ET.ParseError as exc:
        logger.error("Failed to parse OSM XML for node %s: %s", node_id, exc)
        raise NodeNotFoundError(node_id, FetchFailure.MALFORMED_XML, str(exc)) from exc

    node_element = _find_node_element(root)
    if node_element is None:
        logger.warning("No <node> element found in OSM XML for node %s", node_id)
        raise NodeNotFoundError(node_id, FetchFailure.NO_NODE_ELEMENT, "no <node> element")

    latitude = _parse_coordinate(node_element, "lat", node_id)
    longitude = _parse_coordinate(node_element, "lon", node_id)
    tags = extract_tags(node_element)
    logger.debug("Extracted %d tags from OSM node %s", len(tags), node_id)

    return OsmNode(node_id=node_id, latitude=latitude, longitude=longitude, tags=tags)
