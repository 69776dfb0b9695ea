"""Run identifier helpers."""

from __future__ import annotations

from pos_import.common.time_utils import utc_now


def generate_run_id() -> str:
    return utc_now().strftime("run-%Y%m%dT%H%M%S%fZ")
