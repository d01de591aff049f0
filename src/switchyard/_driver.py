"""
Execution driver shared by AsyncResult and AsyncOption.

A deferred body is an `async def` that receives a helpers object. The helpers
abort the rest of the body by raising ShortCircuit, which travels through the
body's loops, conditionals and try blocks like any other exception until the
driver that created those helpers catches it:

    drive(body, helpers)
      ├─ ShortCircuit owned by `helpers`  → Failure(payload)
      ├─ ShortCircuit of a finished run   → Failure(payload)
      ├─ any other Exception              → Failure(exception)
      └─ normal completion with v         → Success(v)

ShortCircuit is recognised by the identity of its owner, never by payload,
so a user exception that happens to wrap the same value is still a plain
host failure. Only a signal whose owner is still running further up the
stack is passed on.
"""

from __future__ import annotations

import inspect
import logging
from contextvars import ContextVar
from typing import Any, Awaitable, Callable, NoReturn, TypeVar

from switchyard.result import Failure, Result, Success

T = TypeVar("T")
logger = logging.getLogger("switchyard.driver")

# Helpers of every execution currently inside drive(), innermost last.
_active_owners: ContextVar[tuple[SignalOwner, ...]] = ContextVar("switchyard_active_owners", default=())


class ShortCircuit(Exception):
    """Abort signal raised by helpers. Only the driver owning the helpers handles it."""

    def __init__(self, owner: SignalOwner, payload: Any) -> None:
        super().__init__(payload)
        self._owner = owner
        self._payload = payload


class SignalOwner:
    """Base for helper objects. One instance per execution."""

    __slots__ = ()

    def _abort(self, payload: Any) -> NoReturn:
        raise ShortCircuit(self, payload)


async def resolve(value: Awaitable[T] | T) -> T:
    """Await `value` if it is awaitable, otherwise hand it back unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


async def drive(body: Callable[[Any], Any], helpers: SignalOwner, kind: str) -> Result[Any, Any]:
    """
    Run `body(helpers)` to completion and fold every way it can end into a Result.

    A ShortCircuit owned by an enclosing execution that is still running is
    re-raised so that it keeps unwinding towards its owner. One whose owner
    has already finished (helpers kept past their run) has nobody left to
    catch it and resolves here like our own. BaseExceptions that are not
    Exceptions (cancellation, KeyboardInterrupt) are never captured.
    """
    token = _active_owners.set((*_active_owners.get(), helpers))
    try:
        value = await resolve(body(helpers))
    except ShortCircuit as signal:
        if signal._owner is not helpers and any(o is signal._owner for o in _active_owners.get()):
            raise
        logger.debug("%s.short_circuit failure=%r", kind, signal._payload)
        return Failure(signal._payload)
    except Exception as e:
        logger.debug("%s.host_failure error_type=%s error=%r", kind, type(e).__name__, e)
        return Failure(e)
    finally:
        _active_owners.reset(token)
    return Success(value)
