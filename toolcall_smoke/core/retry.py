"""
Retry utilities with a fixed backoff for async functions.

This module provides the decorator used around provider calls so that
rate-limited requests are re-sent a bounded number of times, while every
other failure surfaces to the caller on the first attempt.
"""

import asyncio
import logging
from functools import wraps
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

class RetryableError(Exception):
    """
    Exception that should be retried after a fixed delay.

    Used for transient failures that may succeed on a later attempt:
    - Rate limit errors (HTTP 429, provider asking the client to slow down)

    Production Pattern:
    if response.status_code == 429:
        raise RateLimitError(f"Rate limited by {provider}")
    """
    pass

class NonRetryableError(Exception):
    """
    Exception that should NOT be retried.

    Used for failures that end the current test case immediately:
    - Authentication failures (missing or wrong API key, HTTP 401/403)
    - Any other non-429 HTTP status
    - Network failures and timeouts
    - Malformed response bodies
    """
    pass

def async_retry(
    max_attempts: int = 3,
    delay: float = 5.0,
) -> Callable[[F], F]:
    """Decorator for async functions with a fixed-delay retry loop.

    Args:
        max_attempts: Total number of attempts, first call included (default: 3)
        delay: Seconds to wait between attempts (default: 5.0)

    Returns:
        Decorated async function with retry logic

    Example:
        @async_retry(max_attempts=3, delay=5.0)
        async def create_chat_completion(prompt):
            return await client.post(url, json=payload)

    Error Handling:
    - RetryableError: Retried until max_attempts is reached, then re-raised
    - Anything else: Raised immediately without retry
    """
    def decorator(func: Callable) -> Callable:
        func_name = getattr(func, "__name__", repr(func))

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            remaining = max_attempts

            while True:
                try:
                    return await func(*args, **kwargs)

                except RetryableError as e:
                    remaining -= 1
                    if remaining <= 0:
                        logger.error(
                            f"All {max_attempts} attempts failed for {func_name}. "
                            f"Final error: {str(e)}"
                        )
                        raise
                    logger.warning(
                        f"⏳ Retry attempt {max_attempts - remaining}/{max_attempts} "
                        f"for {func_name}. Error: {str(e)}. "
                        f"Retrying in {delay:g} seconds... ({remaining} attempts left)"
                    )
                    await asyncio.sleep(delay)

        return wrapper
    return decorator
