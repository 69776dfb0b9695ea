"""POS service: upsert semantics and the OSM node import entry point."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

from pos_import.common.errors import DuplicateNameError
from pos_import.common.logging import log_event
from pos_import.common.models import OsmNode, Pos
from pos_import.harvest.osm_fetch import fetch_node_xml
from pos_import.harvest.osm_xml_parse import parse_node_xml
from pos_import.pipeline.convert import convert_node_to_pos

logger = logging.getLogger(__name__)


class PosStore(Protocol):
    def get_by_id(self, pos_id: int) -> Pos: ...

    def get_all(self) -> list[Pos]: ...

    def upsert(self, pos: Pos) -> Pos: ...

    def clear(self) -> None: ...


class PosService:
    def __init__(
        self,
        store: PosStore,
        *,
        fetcher: Callable[[int], str] = fetch_node_xml,
        parser: Callable[[str, int], OsmNode] = parse_node_xml,
    ) -> None:
        self.store = store
        self.fetcher = fetcher
        self.parser = parser

    def clear(self) -> None:
        logger.warning("Clearing all POS data")
        self.store.clear()

    def get_all(self) -> list[Pos]:
        return self.store.get_all()

    def get_by_id(self, pos_id: int) -> Pos:
        return self.store.get_by_id(pos_id)

    def upsert(self, pos: Pos) -> Pos:
        """Create when ``pos.id`` is None, otherwise update an existing record.

        Raises ``PosNotFoundError`` for an unknown id and ``DuplicateNameError``
        when the name belongs to another record.
        """
        if pos.id is None:
            logger.info("Creating new POS: %s", pos.name)
        else:
            logger.info("Updating POS with ID: %s", pos.id)
            self.store.get_by_id(pos.id)
        try:
            saved = self.store.upsert(pos)
        except DuplicateNameError as exc:
            logger.error("Error upserting POS %r: %s", pos.name, exc)
            raise
        log_event(logger, "POS upserted", pos_id=saved.id, event="POS_UPSERT", status="ok")
        return saved

    def import_from_osm_node(self, node_id: int) -> Pos:
        started = time.monotonic()
        log_event(logger, "importing POS from OSM node", node_id=node_id, stage="fetch", event="IMPORT_START")

        raw_xml = self.fetcher(node_id)
        node = self.parser(raw_xml, node_id)
        candidate = convert_node_to_pos(node)
        saved = self.upsert(candidate)

        log_event(
            logger,
            f"imported POS '{saved.name}'",
            node_id=node_id,
            pos_id=saved.id,
            stage="upsert",
            event="IMPORT_END",
            status="ok",
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return saved
