"""Exponential backoff retry helper for remote operations."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, TypeVar

import structlog

from .errors import OperationFailedError

logger = structlog.get_logger(__name__)

ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class BackoffRetrier:
    """Immutable retry policy and execution helper.

    Every failure of the wrapped operation is retried the same way; the wait
    after failed attempt `i` (zero-based) is `base_delay_seconds * 2**i` and
    no wait follows the final attempt.

    Attributes:
        max_attempts: Default number of attempts per operation.
        base_delay_seconds: Default base delay for exponential backoff.
        sleep: Awaitable sleep function used between attempts.
    """

    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay_seconds < 0:
            raise ValueError("base_delay_seconds must be >= 0")

    def retry_calculate_delay_seconds(self, attempt_index: int, base_delay_seconds: float | None = None) -> float:
        """Calculate the wait following one failed attempt.

        Args:
            attempt_index: Zero-based index of the failed attempt.
            base_delay_seconds: Optional base delay override.

        Returns:
            float: Wait seconds before the next attempt.

        Raises:
            ValueError: Raised when attempt index is negative.
        """

        if attempt_index < 0:
            raise ValueError("attempt_index must be >= 0")

        resolved_base_delay = self.base_delay_seconds if base_delay_seconds is None else base_delay_seconds
        return float(resolved_base_delay) * (2**attempt_index)

    async def retry_run(
        self,
        operation: Callable[[], Awaitable[ResultT]],
        label: str,
        max_attempts: int | None = None,
        base_delay_seconds: float | None = None,
    ) -> ResultT:
        """Run an async operation with exponential backoff between failures.

        Args:
            operation: Zero-argument coroutine factory to attempt.
            label: Operation label used in logs and error messages.
            max_attempts: Optional attempt limit override.
            base_delay_seconds: Optional base delay override.

        Returns:
            ResultT: Value returned by the first successful attempt.

        Raises:
            OperationFailedError: Raised when every attempt failed.
            ValueError: Raised when overrides are invalid.
        """

        resolved_max_attempts = self.max_attempts if max_attempts is None else max_attempts
        if resolved_max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if base_delay_seconds is not None and base_delay_seconds < 0:
            raise ValueError("base_delay_seconds must be >= 0")

        last_error: Exception | None = None
        for attempt_index in range(resolved_max_attempts):
            attempt_number = attempt_index + 1
            logger.debug(
                "operation attempt started",
                operation=label,
                attempt=attempt_number,
                max_attempts=resolved_max_attempts,
            )
            try:
                result = await operation()
            except Exception as error:  # pylint: disable=broad-exception-caught
                last_error = error
                is_last_attempt = attempt_number == resolved_max_attempts
                delay_seconds = (
                    None
                    if is_last_attempt
                    else self.retry_calculate_delay_seconds(attempt_index, base_delay_seconds=base_delay_seconds)
                )
                logger.warning(
                    "operation attempt failed",
                    operation=label,
                    attempt=attempt_number,
                    max_attempts=resolved_max_attempts,
                    error=str(error),
                    will_retry=not is_last_attempt,
                    next_delay_ms=None if delay_seconds is None else int(delay_seconds * 1000),
                )
                if delay_seconds is not None:
                    await self.sleep(delay_seconds)
                continue

            if attempt_index > 0:
                logger.info("operation succeeded after retries", operation=label, attempt=attempt_number)
            else:
                logger.debug("operation attempt succeeded", operation=label, attempt=attempt_number)
            return result

        raise OperationFailedError(
            f"{label} failed after {resolved_max_attempts} attempts: {last_error}",
            label=label,
            attempts=resolved_max_attempts,
            last_error=last_error,
        ) from last_error
