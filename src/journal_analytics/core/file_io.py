"""Snapshot file loading.

The persistence layer hands journals over as JSON documents of the form
``{"positions": [...], "executions": [...]}`` with decimal strings for
monetary fields.  A bare list is read as positions only.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import InvalidInputError
from .models import JournalSnapshot

logger = logging.getLogger(__name__)


def parse_snapshot(payload: Any) -> JournalSnapshot:
    """Validate a decoded JSON payload into a :class:`JournalSnapshot`."""
    if isinstance(payload, list):
        payload = {"positions": payload}
    if not isinstance(payload, dict):
        raise InvalidInputError(
            f"Journal payload must be an object or a list, got {type(payload).__name__}"
        )
    try:
        return JournalSnapshot.model_validate(payload)
    except ValidationError as exc:
        raise InvalidInputError(f"Malformed journal snapshot: {exc}") from exc


def load_snapshot(path: str | Path) -> JournalSnapshot:
    """Read and validate a journal snapshot from a JSON file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"{path} is not valid JSON: {exc}") from exc

    snapshot = parse_snapshot(payload)
    logger.debug(
        "Loaded snapshot %s: %d positions, %d executions",
        path,
        len(snapshot.positions),
        len(snapshot.executions),
    )
    return snapshot
