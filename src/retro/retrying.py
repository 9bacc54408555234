"""tenacity strategies that honour policies attached to errors.

For code already built around tenacity, these strategies let the
RetryableError raised by an attempt decide the stop and wait behaviour,
mirroring do_with_retry(): a budget of N gives N + 1 invocations with
waits computed for counts 0..N-1.

Only RetryableError subclasses are retried here, since tenacity needs the
wait duration up front (``error.delay``) rather than a blocking ``wait``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import tenacity
from tenacity.stop import stop_base
from tenacity.wait import wait_base

from retro.policies import RetryableError

logger = logging.getLogger(__name__)


def _retryable_error(retry_state: tenacity.RetryCallState) -> Optional[RetryableError]:
    outcome = retry_state.outcome
    if outcome is None or not outcome.failed:
        return None
    exc = outcome.exception()
    return exc if isinstance(exc, RetryableError) else None


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, RetryableError)


retry_if_retryable = tenacity.retry_if_exception(_is_retryable)


class stop_after_policy(stop_base):
    """Stop once the failing error's attempt budget is spent."""

    def __call__(self, retry_state: tenacity.RetryCallState) -> bool:
        error = _retryable_error(retry_state)
        if error is None:
            return True
        # attempt_number is 1-based and includes the attempt that just failed
        return retry_state.attempt_number > error.max_attempts


class wait_for_policy(wait_base):
    """Wait as long as the failing error's policy asks for."""

    def __call__(self, retry_state: tenacity.RetryCallState) -> float:
        error = _retryable_error(retry_state)
        if error is None:
            return 0.0
        return error.delay(retry_state.attempt_number - 1)


def policy_retrying(**kwargs: Any) -> tenacity.Retrying:
    """Build a tenacity.Retrying driven by RetryableError policies.

    Keyword arguments are forwarded to tenacity.Retrying and override the
    defaults (e.g. ``sleep=`` to replace real sleeping in tests).

    Example::

        retryer = policy_retrying()
        version = retryer(get_server, "abc123")
    """
    options: dict[str, Any] = {
        "retry": retry_if_retryable,
        "stop": stop_after_policy(),
        "wait": wait_for_policy(),
        "before_sleep": tenacity.before_sleep_log(logger, logging.DEBUG),
        "reraise": True,
    }
    options.update(kwargs)
    return tenacity.Retrying(**options)
