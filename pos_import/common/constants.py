"""Application constants."""

USER_AGENT = "CampusCoffee/1.0 (Campus Coffee Management System)"
OSM_API_BASE_URL = "https://www.openstreetmap.org/api/0.6/node/"
XML_ACCEPT = "application/xml, text/xml"

# Source tag keys checked before conversion, in reporting order.
REQUIRED_TAGS = (
    "name",
    "addr:street",
    "addr:housenumber",
    "addr:postcode",
    "addr:city",
)
DEFAULT_DESCRIPTION = "Imported from OpenStreetMap"

COMMANDS = ("import", "get", "list", "clear")
EXIT_SUCCESS = 0
EXIT_NOT_FOUND = 10
EXIT_MISSING_FIELDS = 11
EXIT_DUPLICATE_NAME = 12
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "node_id",
    "pos_id",
    "event",
    "status",
    "duration_ms",
    "error_code",
    "message",
)
