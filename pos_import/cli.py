"""CLI entrypoint for importing OpenStreetMap nodes as POS records."""

from __future__ import annotations

import argparse
import json
import sqlite3
import sys
from functools import partial
from pathlib import Path

from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential_jitter

from pos_import.common.config_loader import load_config
from pos_import.common.constants import (
    COMMANDS,
    EXIT_DUPLICATE_NAME,
    EXIT_HARD_FAIL,
    EXIT_MISSING_FIELDS,
    EXIT_NOT_FOUND,
    EXIT_SUCCESS,
)
from pos_import.common.errors import (
    DuplicateNameError,
    FetchFailure,
    MissingFieldsError,
    NodeNotFoundError,
    NotFoundError,
    PipelineError,
)
from pos_import.common.http import HttpClient
from pos_import.common.ids import generate_run_id
from pos_import.common.logging import build_logger, log_event
from pos_import.harvest.osm_fetch import fetch_node_xml
from pos_import.pipeline.pos_service import PosService
from pos_import.storage.sqlite_store import SqlitePosStore

RETRYABLE_FAILURES = {FetchFailure.TRANSPORT, FetchFailure.HTTP_STATUS}


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("target", nargs="?", type=int, default=None, help="OSM node id (import) or POS id (get)")
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--db-path", default=None)
    parser.add_argument("--log-dir", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--attempts", type=int, default=1)
    args = parser.parse_args(argv)
    if args.command in ("import", "get") and args.target is None:
        parser.error(f"{args.command} requires an id")
    if args.attempts < 1:
        parser.error("--attempts must be at least 1")
    return args


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, NodeNotFoundError) and exc.reason in RETRYABLE_FAILURES


def import_with_attempts(service: PosService, node_id: int, attempts: int):
    """Retry the whole import on transport or HTTP failures only."""

    @retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential_jitter(initial=1.0, max=10.0, jitter=1.0),
        retry=retry_if_exception(_is_retryable),
        reraise=True,
    )
    def _wrapped():
        return service.import_from_osm_node(node_id)

    return _wrapped()


def _print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))


def execute_command(args: argparse.Namespace, service: PosService) -> None:
    if args.command == "import":
        _print_json(import_with_attempts(service, args.target, args.attempts).to_dict())
    elif args.command == "get":
        _print_json(service.get_by_id(args.target).to_dict())
    elif args.command == "list":
        _print_json([pos.to_dict() for pos in service.get_all()])
    elif args.command == "clear":
        service.clear()
    else:
        raise ValueError(f"Unknown command: {args.command}")


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    logger = build_logger(run_id, log_dir=Path(args.log_dir) if args.log_dir else None, level=args.log_level)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    config = load_config(Path(args.config_dir), overlay_config_dir=overlay_config_dir)

    log_event(logger, "command start", run_id=run_id, stage=args.command, event="COMMAND_START", status="ok")
    store: SqlitePosStore | None = None
    try:
        store = SqlitePosStore(args.db_path or config.db_path)
        with HttpClient(timeout=config.timeout, user_agent=config.user_agent) as client:
            fetcher = partial(fetch_node_xml, http_client=client, base_url=config.base_url)
            execute_command(args, PosService(store, fetcher=fetcher))
    except PipelineError as exc:
        log_event(
            logger,
            str(exc),
            run_id=run_id,
            stage=args.command,
            event="COMMAND_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        if isinstance(exc, NotFoundError):
            return EXIT_NOT_FOUND
        if isinstance(exc, MissingFieldsError):
            return EXIT_MISSING_FIELDS
        if isinstance(exc, DuplicateNameError):
            return EXIT_DUPLICATE_NAME
        return EXIT_HARD_FAIL
    except (OSError, sqlite3.Error) as exc:
        log_event(
            logger,
            f"storage failure: {exc}",
            run_id=run_id,
            stage=args.command,
            event="COMMAND_FAIL",
            status="error",
            error_code="STORAGE_ERROR",
        )
        return EXIT_HARD_FAIL
    finally:
        if store is not None:
            store.close()

    log_event(logger, "command end", run_id=run_id, stage=args.command, event="COMMAND_END", status="ok")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except PipelineError:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
