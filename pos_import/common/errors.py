"""Domain errors and failure typing."""

from __future__ import annotations

from enum import Enum


class PipelineError(Exception):
    """Base class for import failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class ContractError(PipelineError):
    """Raised when a record would be built with missing or malformed fields."""

    error_code = "CONTRACT_ERROR"


class FetchFailure(str, Enum):
    HTTP_STATUS = "http_status"
    TRANSPORT = "transport"
    EMPTY_BODY = "empty_body"
    MALFORMED_XML = "malformed_xml"
    NO_NODE_ELEMENT = "no_node_element"
    INVALID_COORDINATE = "invalid_coordinate"
    INVALID_NODE_ID = "invalid_node_id"


class NotFoundError(PipelineError):
    """Single external kind for anything that could not be found."""

    error_code = "NOT_FOUND"


class NodeNotFoundError(NotFoundError):
    """The OSM node could not be fetched or parsed.

    Transport errors, bad status codes, empty bodies and structural parse
    failures all surface as this one error. ``reason`` keeps the cause for logs.
    """

    def __init__(self, node_id: int, reason: FetchFailure, detail: str | None = None) -> None:
        message = f"OpenStreetMap node {node_id} not found"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.node_id = node_id
        self.reason = reason
        self.detail = detail


class PosNotFoundError(NotFoundError):
    def __init__(self, pos_id: int) -> None:
        super().__init__(f"POS with ID {pos_id} does not exist")
        self.pos_id = pos_id


class MissingFieldsError(PipelineError):
    """Raised when an OSM node lacks tags required to build a POS."""

    error_code = "MISSING_FIELDS"

    def __init__(self, node_id: int, missing_fields: list[str]) -> None:
        super().__init__(
            f"OpenStreetMap node {node_id} is missing required fields: {', '.join(missing_fields)}"
        )
        self.node_id = node_id
        self.missing_fields = list(missing_fields)


class DuplicateNameError(PipelineError):
    error_code = "DUPLICATE_NAME"

    def __init__(self, name: str) -> None:
        super().__init__(f"POS with name '{name}' already exists")
        self.name = name
