from __future__ import annotations

import pytest

from pos_import.common.errors import ContractError
from pos_import.common.models import Campus, OsmNode, PosType, build_pos

VALID = {
    "name": "Rada Coffee",
    "description": "Cafe",
    "type": PosType.CAFE,
    "campus": Campus.ALTSTADT,
    "street": "Untere Straße",
    "house_number": "21",
    "city": "Heidelberg",
}


def test_build_pos_produces_identity_less_candidate():
    pos = build_pos(**VALID, postal_code=69117)

    assert pos.id is None
    assert pos.created_at is None
    assert pos.postal_code == 69117


@pytest.mark.parametrize("field", ["name", "description", "street", "house_number", "city"])
def test_build_pos_rejects_empty_text(field):
    with pytest.raises(ContractError):
        build_pos(**{**VALID, field: ""})


def test_build_pos_rejects_open_string_categories():
    with pytest.raises(ContractError):
        build_pos(**{**VALID, "type": "CAFE_LIKE"})
    with pytest.raises(ContractError):
        build_pos(**{**VALID, "campus": "MOON"})


def test_build_pos_rejects_non_integer_postal_code():
    with pytest.raises(ContractError):
        build_pos(**VALID, postal_code="69117")


def test_pos_is_immutable():
    pos = build_pos(**VALID)
    with pytest.raises(AttributeError):
        pos.name = "Other"


def test_with_identity_and_to_dict():
    pos = build_pos(**VALID).with_identity(3, "2026-01-01T00:00:00.000+00:00", "2026-01-02T00:00:00.000+00:00")

    payload = pos.to_dict()

    assert payload["id"] == 3
    assert payload["type"] == "CAFE"
    assert payload["campus"] == "ALTSTADT"
    assert payload["updated_at"].startswith("2026-01-02")


def test_osm_node_tag_accessors():
    node = OsmNode(
        node_id=1,
        latitude=1.0,
        longitude=2.0,
        tags={"addr:housenumber": "21a", "website": "https://example.test", "phone": "+49 6221"},
    )

    assert node.house_number == "21a"
    assert node.website == "https://example.test"
    assert node.phone == "+49 6221"
    assert node.name is None
