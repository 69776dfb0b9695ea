"""Conversion of a parsed OSM node into a POS candidate."""

from __future__ import annotations

import logging
import re

from pos_import.common.constants import DEFAULT_DESCRIPTION, REQUIRED_TAGS
from pos_import.common.errors import MissingFieldsError
from pos_import.common.models import Campus, OsmNode, Pos, PosType, build_pos

logger = logging.getLogger(__name__)

AMENITY_TYPES = {
    "cafe": PosType.CAFE,
    "bakery": PosType.BAKERY,
    "restaurant": PosType.CAFETERIA,
    "fast_food": PosType.CAFETERIA,
    "vending_machine": PosType.VENDING_MACHINE,
}

# (campus, (min_lat, max_lat), (min_lon, max_lon)), checked in order, bounds inclusive.
# BERGHEIM and INF overlap; the first listed box wins.
CAMPUS_BOXES = (
    (Campus.ALTSTADT, (49.408, 49.414), (8.705, 8.715)),
    (Campus.BERGHEIM, (49.412, 49.418), (8.665, 8.680)),
    (Campus.INF, (49.415, 49.425), (8.665, 8.675)),
)
DEFAULT_CAMPUS = Campus.ALTSTADT
_POSTAL_CODE_RE = re.compile(r"[+-]?[0-9]+")
# Postal codes are stored as 32-bit signed integers.
POSTAL_CODE_MIN = -(2**31)
POSTAL_CODE_MAX = 2**31 - 1


def validate_required_fields(node: OsmNode) -> None:
    missing = [key for key in REQUIRED_TAGS if not node.tag(key)]
    if missing:
        logger.warning("OSM node %s is missing required fields: %s", node.node_id, missing)
        raise MissingFieldsError(node.node_id, missing)


def map_amenity_to_type(amenity: str | None) -> PosType:
    pos_type = AMENITY_TYPES.get((amenity or "").lower())
    if pos_type is None:
        logger.debug("Unknown amenity %r, defaulting to %s", amenity, PosType.CAFE.value)
        return PosType.CAFE
    return pos_type


def determine_campus(latitude: float, longitude: float) -> Campus:
    for campus, (min_lat, max_lat), (min_lon, max_lon) in CAMPUS_BOXES:
        if min_lat <= latitude <= max_lat and min_lon <= longitude <= max_lon:
            return campus
    logger.debug("Coordinates (%s, %s) match no campus, defaulting to %s", latitude, longitude, DEFAULT_CAMPUS.value)
    return DEFAULT_CAMPUS


def parse_postal_code(raw: str | None) -> int | None:
    cleaned = (raw or "").strip()
    if not cleaned:
        return None
    value = int(cleaned) if _POSTAL_CODE_RE.fullmatch(cleaned) else None
    if value is None or not POSTAL_CODE_MIN <= value <= POSTAL_CODE_MAX:
        logger.warning("Invalid postal code format: %r, leaving it empty", raw)
        return None
    return value


def build_description(amenity: str | None, cuisine: str | None) -> str:
    parts: list[str] = []
    if amenity:
        parts.append(amenity[0].upper() + amenity[1:].replace("_", " "))
    if cuisine:
        parts.append(cuisine.replace("_", " "))
    if not parts:
        return DEFAULT_DESCRIPTION
    return " - ".join(parts)


def convert_node_to_pos(node: OsmNode) -> Pos:
    """Validate ``node`` and map it to a POS candidate without identity."""
    logger.debug("Converting OSM node %s to POS", node.node_id)
    validate_required_fields(node)

    return build_pos(
        name=node.name,
        description=build_description(node.amenity, node.cuisine),
        type=map_amenity_to_type(node.amenity),
        campus=determine_campus(node.latitude, node.longitude),
        street=node.street,
        house_number=node.house_number,
        postal_code=parse_postal_code(node.postcode),
        city=node.city,
    )
