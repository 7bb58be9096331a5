"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Fallback Chain Runner.

Runs an ordered list of equivalent endpoint attempts (the same logical
operation against different route variants) strictly one after another:

- the first success wins and later attempts never run;
- a route-not-found failure (404) moves on to the next attempt;
- any other failure (401, 5xx, transport, cancellation) aborts the chain
  and is raised as-is;
- when every attempt was skipped, the last 404 is raised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from picado.exceptions import FallbackExhaustedError
from picado.logging_config import (
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    log_fallback_step,
    set_correlation_id,
)

logger = get_logger(__name__)

T = TypeVar("T")

_NOT_FOUND_MESSAGE = re.compile(r"\b404\b")


class ChainState(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    ABORTED = "aborted"


class AttemptOutcome(str, Enum):
    SUCCESS = "success"
    CONTINUE = "continue"
    ABORT = "abort"


@dataclass(frozen=True)
class EndpointAttempt(Generic[T]):
    """One route variant of a logical operation.

    Attributes:
        label: The wire path the attempt targets, reported back to callers.
        call: Zero-argument coroutine factory performing the request.
    """
    label: str
    call: Callable[[], Awaitable[T]]

    @classmethod
    def of(cls, func: Callable[..., Awaitable[T]], path: str, *args: Any, **kwargs: Any) -> EndpointAttempt[T]:
        """Build an attempt calling ``func(path, *args, **kwargs)``."""
        return cls(label=path, call=lambda: func(path, *args, **kwargs))


@dataclass
class AttemptResult(Generic[T]):
    """Tagged outcome of a single attempt."""
    label: str
    outcome: AttemptOutcome
    value: Optional[T] = None
    error: Optional[Exception] = None


def is_route_not_found(error: BaseException, match_message: bool = False) -> bool:
    """Whether a failure means "this route variant does not exist here".

    The structured ``status`` decides whenever the error carries one.
    Transport failures (status 0) are never route-not-found. With
    ``match_message``, an error without any status counts when its message
    mentions 404; this is off by default because unrelated messages can
    contain that number.
    """
    status = getattr(error, "status", None)
    if isinstance(status, int):
        return status == 404
    if match_message:
        return bool(_NOT_FOUND_MESSAGE.search(str(error)))
    return False


class FallbackChain(Generic[T]):
    """State machine driving one fallback chain. Runs at most once.

    Args:
        attempts: Ordered, semantically equivalent attempts.
        name: Operation name used in logs.
        match_message: Also treat status-less errors mentioning 404 as
            route-not-found. See :func:`is_route_not_found`.
    """

    def __init__(
        self,
        attempts: Sequence[EndpointAttempt[T]],
        name: str = "",
        match_message: bool = False,
    ) -> None:
        self.attempts = list(attempts)
        self.name = name
        self.match_message = match_message
        self.state = ChainState.PENDING
        self.results: List[AttemptResult[T]] = []
        self.last_error: Optional[Exception] = None
        self.served_by: Optional[str] = None

    @property
    def attempts_made(self) -> int:
        return len(self.results)

    async def evaluate(self, attempt: EndpointAttempt[T]) -> AttemptResult[T]:
        """Execute one attempt and tag its outcome."""
        try:
            value = await attempt.call()
        except Exception as error:
            outcome = (
                AttemptOutcome.CONTINUE
                if is_route_not_found(error, self.match_message)
                else AttemptOutcome.ABORT
            )
            return AttemptResult(label=attempt.label, outcome=outcome, error=error)
        return AttemptResult(label=attempt.label, outcome=AttemptOutcome.SUCCESS, value=value)

    async def run_with_label(self) -> Tuple[T, str]:
        """Run the chain, returning the value and the label that served it.

        Every attempt logs under one correlation id. An id already bound by
        the caller is reused; otherwise a fresh one is bound for the run.
        """
        if self.state is not ChainState.PENDING:
            raise RuntimeError(f"Fallback chain already finished ({self.state.value})")

        outer_id = get_correlation_id()
        set_correlation_id(outer_id)
        try:
            return await self._run()
        finally:
            if outer_id is None:
                clear_correlation_id()
            else:
                set_correlation_id(outer_id)

    async def _run(self) -> Tuple[T, str]:
        for index, attempt in enumerate(self.attempts, start=1):
            result = await self.evaluate(attempt)
            self.results.append(result)
            log_fallback_step(
                logger,
                attempt=index,
                label=attempt.label,
                outcome=result.outcome.value,
                status=getattr(result.error, "status", None),
                chain=self.name,
            )

            if result.outcome is AttemptOutcome.SUCCESS:
                self.state = ChainState.SUCCEEDED
                self.served_by = attempt.label
                return result.value, attempt.label  # type: ignore[return-value]

            self.last_error = result.error
            if result.outcome is AttemptOutcome.ABORT:
                self.state = ChainState.ABORTED
                raise result.error  # type: ignore[misc]

        self.state = ChainState.EXHAUSTED
        if self.last_error is not None:
            raise self.last_error
        raise FallbackExhaustedError("All endpoint attempts failed")

    async def run(self) -> T:
        """Run the chain and return the first successful value."""
        value, _ = await self.run_with_label()
        return value


async def first_ok(*attempts: EndpointAttempt[T], name: str = "") -> T:
    """Run ``attempts`` as a fresh :class:`FallbackChain`."""
    return await FallbackChain(attempts, name=name).run()
