"""Data models used across the import pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from pos_import.common.errors import ContractError


class PosType(str, Enum):
    CAFE = "CAFE"
    BAKERY = "BAKERY"
    CAFETERIA = "CAFETERIA"
    VENDING_MACHINE = "VENDING_MACHINE"


class Campus(str, Enum):
    ALTSTADT = "ALTSTADT"
    BERGHEIM = "BERGHEIM"
    INF = "INF"


@dataclass(frozen=True)
class OsmNode:
    """A parsed OSM node: coordinates plus its flat tag map."""

    node_id: int
    latitude: float
    longitude: float
    tags: dict[str, str] = field(default_factory=dict)

    def tag(self, key: str) -> str | None:
        return self.tags.get(key)

    @property
    def name(self) -> str | None:
        return self.tags.get("name")

    @property
    def amenity(self) -> str | None:
        return self.tags.get("amenity")

    @property
    def cuisine(self) -> str | None:
        return self.tags.get("cuisine")

    @property
    def street(self) -> str | None:
        return self.tags.get("addr:street")

    @property
    def house_number(self) -> str | None:
        return self.tags.get("addr:housenumber")

    @property
    def postcode(self) -> str | None:
        return self.tags.get("addr:postcode")

    @property
    def city(self) -> str | None:
        return self.tags.get("addr:city")

    @property
    def website(self) -> str | None:
        return self.tags.get("website")

    @property
    def phone(self) -> str | None:
        return self.tags.get("phone")

    @property
    def opening_hours(self) -> str | None:
        return self.tags.get("opening_hours")


@dataclass(frozen=True)
class Pos:
    name: str
    description: str
    type: PosType
    campus: Campus
    street: str
    house_number: str
    postal_code: int | None
    city: str
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def with_identity(self, pos_id: int, created_at: str, updated_at: str) -> "Pos":
        return replace(self, id=pos_id, created_at=created_at, updated_at=updated_at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "campus": self.campus.value,
            "street": self.street,
            "house_number": self.house_number,
            "postal_code": self.postal_code,
            "city": self.city,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


def _require_text(value: object, field_name: str) -> str:
    if not isinstance(value, str) or not value:
        raise ContractError(f"POS field '{field_name}' must be a non-empty string")
    return value


def build_pos(
    *,
    name: str,
    description: str,
    type: PosType,
    campus: Campus,
    street: str,
    house_number: str,
    city: str,
    postal_code: int | None = None,
    id: int | None = None,
    created_at: str | None = None,
    updated_at: str | None = None,
) -> Pos:
    """Build a fully-formed ``Pos``; raises ``ContractError`` otherwise."""
    if not isinstance(type, PosType):
        raise ContractError(f"POS type must be a PosType, got {type!r}")
    if not isinstance(campus, Campus):
        raise ContractError(f"POS campus must be a Campus, got {campus!r}")
    if postal_code is not None and (isinstance(postal_code, bool) or not isinstance(postal_code, int)):
        raise ContractError(f"POS postal_code must be an int or None, got {postal_code!r}")
    return Pos(
        name=_require_text(name, "name"),
        description=_require_text(description, "description"),
        type=type,
        campus=campus,
        street=_require_text(street, "street"),
        house_number=_require_text(house_number, "house_number"),
        postal_code=postal_code,
        city=_require_text(city, "city"),
        id=id,
        created_at=created_at,
        updated_at=updated_at,
    )
