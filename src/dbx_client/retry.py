"""Caller-side retry helpers built on tenacity.

The clients never retry on their own. These helpers let a caller opt in,
honoring the server's retry-after advice on rate limits::

    from dbx_client.retry import retry_rate_limited

    @retry_rate_limited(attempts=5)
    def fetch(client, path):
        return client.download(path)

Works on coroutine functions too; tenacity picks the async flavor.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tenacity import before_sleep_log, retry, retry_if_exception_type, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from dbx_client._errors import RequestLimitsError, ServerError, TransportError

if TYPE_CHECKING:
    from tenacity import RetryCallState

log = logging.getLogger(__name__)

RETRYABLE_ERRORS: tuple[type[Exception], ...] = (RequestLimitsError, ServerError, TransportError)


class wait_retry_after(wait_base):  # noqa: N801 -- tenacity naming convention
    """Wait for the server's retry-after when the last attempt was rate limited.

    :param fallback: Strategy for every other failure (default: exponential, 2-10s).
    :param max_wait: Upper bound applied to the server's advice, if given.
    """

    def __init__(self, fallback: wait_base | None = None, *, max_wait: float | None = None) -> None:
        self._fallback = fallback or wait_exponential(multiplier=1, min=2, max=10)
        self._max_wait = max_wait

    def __call__(self, retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        if outcome is not None and outcome.failed:
            exc = outcome.exception()
            if isinstance(exc, RequestLimitsError) and exc.retry_after is not None:
                delay = float(exc.retry_after)
                if self._max_wait is not None:
                    delay = min(delay, self._max_wait)
                return delay
        return self._fallback(retry_state)


def retry_rate_limited(
    *,
    attempts: int = 3,
    fallback: wait_base | None = None,
    max_wait: float | None = None,
    errors: tuple[type[Exception], ...] = RETRYABLE_ERRORS,
) -> Any:
    """Return a tenacity ``retry`` decorator for rate limits, 5xx and transport failures.

    The last error is re-raised once ``attempts`` is exhausted.
    """
    return retry(
        retry=retry_if_exception_type(errors),
        stop=stop_after_attempt(attempts),
        wait=wait_retry_after(fallback, max_wait=max_wait),
        before_sleep=before_sleep_log(log, logging.WARNING),  # type: ignore[arg-type,unused-ignore]
        reraise=True,
    )
