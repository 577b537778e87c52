"""Fan a query out to several interpreters and merge their entries."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from contextvars import copy_context
from typing import List, Optional, Sequence

from ..config import Settings, get_settings
from ..observability import log_event, run_scope
from .entries import ResultEntry
from .interpreters import QueryInterpreter, UnitCalcInterpreter, UnitLookupInterpreter

logger = logging.getLogger(__name__)


class QueryDispatcher:
    """Run every interpreter for a query on a thread pool.

    Interpreters share nothing mutable, so they run without locking. An
    interpreter that raises is logged and contributes no entries.
    """

    def __init__(self, interpreters: Sequence[QueryInterpreter], settings: Optional[Settings] = None) -> None:
        self.interpreters = list(interpreters)
        self.settings = settings or get_settings()
        self._executor = ThreadPoolExecutor(
            max_workers=self.settings.workers, thread_name_prefix="quickcalc-query"
        )

    def dispatch(self, query: str, limit: Optional[int] = None) -> List[ResultEntry]:
        with run_scope():
            # workers inherit the run id
            futures = [
                (interpreter, self._executor.submit(copy_context().run, interpreter.interpret, query))
                for interpreter in self.interpreters
            ]
            entries: List[ResultEntry] = []
            for interpreter, future in futures:
                try:
                    entries.extend(future.result())
                except Exception:
                    logger.exception("interpreter %s failed for query %r", interpreter.name, query)
            entries.sort(key=lambda entry: entry.priority, reverse=True)
            if limit is not None:
                entries = entries[:limit]
            log_event("query.dispatch", query=query, entries=len(entries))
        return entries

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "QueryDispatcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_dispatcher(settings: Optional[Settings] = None) -> QueryDispatcher:
    """Dispatcher wired with the default calculator and unit lookup."""

    settings = settings or get_settings()
    return QueryDispatcher(
        [UnitCalcInterpreter(settings=settings), UnitLookupInterpreter(settings=settings)],
        settings=settings,
    )


__all__ = ["QueryDispatcher", "build_dispatcher"]
