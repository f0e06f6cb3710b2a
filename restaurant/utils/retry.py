# restaurant/utils/retry.py
import functools
import logging

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from restaurant.domain.exceptions import AppError, TransientError
from restaurant.utils.settings import API_RETRY_ATTEMPTS, API_RETRY_WAIT_SECONDS
from restaurant.utils.logging import get_logger

logger = get_logger(__name__)
# full diagnostics of failed requests go here and never to the caller
api_logger = get_logger("restaurant.apis")

_log_retry = before_sleep_log(logger, logging.WARNING)


def _reset_between_attempts(retry_state):
    """Log the failed attempt and roll back every handler argument that can.

    Services share the request session across attempts; after a failed
    statement (or a dropped connection) it refuses to run anything until
    rolled back.
    """
    _log_retry(retry_state)
    for value in retry_state.kwargs.values():
        rollback = getattr(value, "rollback", None)
        if callable(rollback):
            rollback()


def api_retry(attempts: int = API_RETRY_ATTEMPTS, wait_seconds: float = API_RETRY_WAIT_SECONDS):
    """
    Runs the whole handler up to ``attempts`` times.
    AppError (validation, not found, conflict) is raised straight through,
    anything else is retried and, once attempts run out, logged and
    turned into a generic TransientError.
    """

    def decorator(func):
        retrying = retry(
            reraise=True,
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=wait_seconds, min=wait_seconds, max=2),
            retry=retry_if_not_exception_type(AppError),
            before_sleep=_reset_between_attempts,
        )(func)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return retrying(*args, **kwargs)
            except AppError:
                raise
            except Exception as e:
                api_logger.error(
                    f"{func.__name__} failed after {attempts} attempt(s): {e!r}",
                    exc_info=True,
                )
                raise TransientError() from e

        return wrapper

    return decorator
