"""
Text serialization of client records.

Dates leave as ISO-8601 timestamps and come back as datetime values; the
pydantic models do both conversions, so the engine only ever sees real dates.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Union

from pydantic import TypeAdapter

from models.client import Client

logger = logging.getLogger(__name__)

_CLIENTS = TypeAdapter(List[Client])


def clients_to_json(clients: Sequence[Client], *, indent: Union[int, None] = 2) -> str:
    return _CLIENTS.dump_json(list(clients), by_alias=True, indent=indent).decode("utf-8")


def clients_from_json(text: Union[str, bytes]) -> List[Client]:
    return _CLIENTS.validate_json(text)


def load_clients(path: Union[str, Path]) -> List[Client]:
    clients = clients_from_json(Path(path).read_bytes())
    logger.info("Loaded %d clients from %s", len(clients), path)
    return clients


def dump_clients(clients: Sequence[Client], path: Union[str, Path]) -> None:
    Path(path).write_text(clients_to_json(clients), encoding="utf-8")
    logger.info("Wrote %d clients to %s", len(clients), path)
