"""Run-scoped event logging.

A run is one HTTP request, one dispatched launcher query or one CLI
invocation. Every event logged inside :func:`run_scope` carries the run's id
in ``record.payload`` so calculator events can be tied back to the request
or keystroke that caused them. Nested scopes keep the outer id.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

_active_run: ContextVar[Optional[str]] = ContextVar("quickcalc_run", default=None)


def current_run_id() -> Optional[str]:
    return _active_run.get()


@contextmanager
def run_scope(run_id: Optional[str] = None) -> Iterator[str]:
    """Bind a run id for the block and yield it.

    ``run_id`` wins when given; otherwise an enclosing run is reused and only
    a top-level scope mints a fresh id.
    """

    active = run_id or _active_run.get() or uuid.uuid4().hex
    token = _active_run.set(active)
    try:
        yield active
    finally:
        _active_run.reset(token)


def log_event(event: str, **fields: object) -> None:
    """Log ``event`` at INFO with the active run id and ``fields`` as payload."""

    logger.info(event, extra={"payload": {"run_id": _active_run.get(), **fields}})


__all__ = ["current_run_id", "run_scope", "log_event"]
