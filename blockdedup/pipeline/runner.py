"""
Scheduling seam for dedup passes.

Small inputs run inline on the caller's thread; inputs at or above
`large_input_threshold` characters are handed to a background thread pool so an
interactive caller is not blocked. The result is the same either way: both paths
call dedup_text with the same arguments.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional

from blockdedup.options.schema import DedupConfig
from blockdedup.pipeline.dedup import (
    DEFAULT_PROGRESS_EVERY,
    DedupResult,
    ProgressCallback,
    dedup_text,
)

logger = logging.getLogger(__name__)

LARGE_INPUT_CHARS = 100_000

_BACKGROUND: Optional[ThreadPoolExecutor] = None
_BACKGROUND_LOCK = threading.Lock()


def _background_executor() -> ThreadPoolExecutor:
    """Lazily created single-worker pool shared by background passes."""
    global _BACKGROUND
    with _BACKGROUND_LOCK:
        if _BACKGROUND is None:
            _BACKGROUND = ThreadPoolExecutor(max_workers=1, thread_name_prefix="blockdedup")
        return _BACKGROUND


def schedule_dedup(
    text: str,
    config: Optional[DedupConfig] = None,
    *,
    large_input_threshold: int = LARGE_INPUT_CHARS,
    executor: Optional[Executor] = None,
    progress: Optional[ProgressCallback] = None,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    cancel_event: Optional[threading.Event] = None,
) -> "Future[DedupResult]":
    """
    Return a Future for the dedup result.

    - len(text) < large_input_threshold: computed inline; the returned future is
      already done (an exception, e.g. ConfigurationError, is set on it).
    - otherwise: submitted to `executor` (or a shared single-worker pool).
    """
    text = text or ""
    kwargs = dict(progress=progress, progress_every=progress_every, cancel_event=cancel_event)

    if len(text) < large_input_threshold:
        fut: "Future[DedupResult]" = Future()
        try:
            fut.set_result(dedup_text(text, config, **kwargs))
        except Exception as e:
            fut.set_exception(e)
        return fut

    logger.debug("Input of %d chars dispatched to background worker", len(text))
    ex = executor or _background_executor()
    return ex.submit(dedup_text, text, config, **kwargs)
