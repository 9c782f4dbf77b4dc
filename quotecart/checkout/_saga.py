"""
Saga — sequential steps with compensation.

    saga = (
        step(action=save_order, compensate=void_order)
        .then(lambda order: step(action=log_to_lead(order)))
    )
    result = await run(saga)     # Result[SagaResult[T], SagaError[E]]

When a step fails, the compensators recorded so far run in reverse.
Chains have any length: .then() works on a step and on a chain alike.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from combinators import lift as L
from kungfu import Result, Ok, Error, LazyCoroResult

logger = logging.getLogger("quotecart.checkout.saga")

type Compensator[T] = Callable[[T], Awaitable[None]]
"""Receives the action result and undoes it."""

# ═══════════════════════════════════════════════════════════════════════════════
# AST
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SagaStep[T, E]:
    action: LazyCoroResult[T, E]
    compensate: Compensator[T] | None = None

    def then[U, E2](self, f: Callable[[T], Saga[U, E2]]) -> Then[T, U]:
        return Then(self, f)


@dataclass(frozen=True, slots=True)
class Then[T, U]:
    """Run inner, feed its value to f, run what f returns."""

    inner: Saga[T, Any]
    f: Callable[[T], Saga[U, Any]]

    def then[V](self, f: Callable[[U], Saga[V, Any]]) -> Then[U, V]:
        return Then(self, f)


type Saga[T, E] = SagaStep[T, E] | Then[Any, T]

# ═══════════════════════════════════════════════════════════════════════════════
# Results
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class SagaResult[T]:
    value: T
    steps_executed: int
    compensators_recorded: int


@dataclass(frozen=True, slots=True)
class SagaError[E]:
    error: E
    step_failed: int
    compensators_run: int
    compensators_failed: int

    @property
    def rollback_complete(self) -> bool:
        return self.compensators_failed == 0


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def step[T, E](
    action: LazyCoroResult[T, E],
    compensate: Compensator[T] | None = None,
) -> SagaStep[T, E]:
    return SagaStep(action=action, compensate=compensate)


def from_async[T, E](
    action: Callable[[], Awaitable[T]],
    on_error: Callable[[Exception], E],
    compensate: Compensator[T] | None = None,
) -> SagaStep[T, E]:
    """
    Step from a plain coroutine function; exceptions become Error(on_error(exc)).

    Example:
        from_async(
            lambda: orders.save(order),
            on_error=lambda e: CheckoutErrors.persistence(str(e)),
            compensate=orders.void,
        )
    """
    return SagaStep(action=L.catching_async(action, on_error=on_error), compensate=compensate)


# ═══════════════════════════════════════════════════════════════════════════════
# run()
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class _Trace:
    steps: int = 0
    compensators: list[tuple[Any, Compensator[Any]]] = field(default_factory=list)


async def _execute(saga: Saga[Any, Any], trace: _Trace) -> Result[Any, Any]:
    match saga:
        case SagaStep(action, compensate):
            trace.steps += 1
            match await action:
                case Ok(value):
                    if compensate is not None:
                        trace.compensators.append((value, compensate))
                    return Ok(value)
                case Error(e):
                    return Error(e)
        case Then(inner, f):
            match await _execute(inner, trace):
                case Ok(value):
                    return await _execute(f(value), trace)
                case Error(e):
                    return Error(e)


async def run_compensators(compensators: list[tuple[Any, Compensator[Any]]]) -> tuple[int, int]:
    """Run compensators in reverse. Returns (run, failed)."""
    comp_run = 0
    comp_failed = 0
    for value, comp in reversed(compensators):
        try:
            await comp(value)
            comp_run += 1
        except Exception:
            logger.exception("compensation failed for %r", value)
            comp_failed += 1
    return comp_run, comp_failed


async def run[T, E](saga: Saga[T, E]) -> Result[SagaResult[T], SagaError[E]]:
    """
    Execute the saga, rolling back on failure.

    Example:
        match await run(saga):
            case Ok(r):
                r.value
            case Error(e):
                e.error, e.step_failed, e.rollback_complete
    """
    trace = _Trace()
    match await _execute(saga, trace):
        case Ok(value):
            return Ok(SagaResult(
                value=value,
                steps_executed=trace.steps,
                compensators_recorded=len(trace.compensators),
            ))
        case Error(error):
            logger.info("step %d failed, rolling back %d step(s)", trace.steps, len(trace.compensators))
            comp_run, comp_failed = await run_compensators(trace.compensators)
            return Error(SagaError(
                error=error,
                step_failed=trace.steps,
                compensators_run=comp_run,
                compensators_failed=comp_failed,
            ))


__all__ = (
    "Compensator",
    "SagaStep",
    "Then",
    "Saga",
    "SagaResult",
    "SagaError",
    "step",
    "from_async",
    "run",
    "run_compensators",
)
