# exercise_tracker/guard.py

import asyncio
import functools
import logging

from exercise_tracker.config import Settings
from exercise_tracker.errors import MissingResult, RequestTimeout

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = Settings.request_timeout_seconds


def _name(fn) -> str:
    return getattr(fn, "__name__", repr(fn))


async def run_guarded(fn, *args, timeout: float = REQUEST_TIMEOUT_SECONDS, **kwargs):
    """
    Run a blocking data-access call in the default executor under a
    deadline owned by this request alone.

    The worker thread is not interrupted on timeout; only the response
    stops waiting for it. Errors raised by `fn` propagate unchanged.
    """
    loop = asyncio.get_running_loop()
    call = functools.partial(fn, *args, **kwargs)

    try:
        result = await asyncio.wait_for(loop.run_in_executor(None, call), timeout)
    except asyncio.TimeoutError:
        logger.warning("%s did not finish within %.1fs", _name(fn), timeout)
        raise RequestTimeout()

    if result is None:
        logger.warning("%s returned no result", _name(fn))
        raise MissingResult()
    return result
