"""
AsyncResult — a lazy, re-runnable asynchronous Result.

An AsyncResult stores an `async def` body and runs it only when awaited.
The body is written as straight-line async code and reaches the failure
track through its helpers:

    async def load_order(h: AsyncResultHelpers[str]) -> Order:
        user = await h.from_async_op(users.find(user_id))      # Result-returning coroutine
        cart = await h.lift_result(validate_cart(user.cart))    # plain Result
        if cart.total <= 0:
            h.throw_e("empty cart")
        return Order(user, cart)                                 # → Success(Order)

    outcome = await AsyncResult(load_order).map(persist).run()

Whatever happens inside the body ends up in the resolved Result:

  - a helper given a failure     → Failure(e), the rest of the body is skipped
  - an exception raised anywhere → Failure(exception)
  - a normal return of v         → Success(v)

so `run()` never raises for failures of the body or its continuations.

Nothing is cached. Every `run()` (and every `await`) calls the body again
and repeats its side effects; an AsyncResult is a description of work, not
a handle on work in progress.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any, Callable, Generator, Generic, Iterable, NoReturn, TypeVar, Union

from switchyard._driver import ShortCircuit, SignalOwner, drive, resolve
from switchyard.async_option import AsyncOption
from switchyard.result import Failure, Result, Success

E = TypeVar("E")
F = TypeVar("F")
A = TypeVar("A")
B = TypeVar("B")
R = TypeVar("R")

AsyncResultBody = Callable[["AsyncResultHelpers[E]"], Union[Awaitable[A], A]]

# Anything chain()/chain_left() continuations may hand back.
ResultLike = Union[Result[E, A], "AsyncResult[E, A]", Awaitable[Result[E, A]]]


class AsyncResultHelpers(SignalOwner, Generic[E]):
    """
    The failure-channel operations available inside an AsyncResult body.

    A fresh instance is created for every execution. Each operation that
    fails aborts the remaining body the way a raised exception would, so a
    `try/except Exception` written around a helper call does see the abort.
    """

    __slots__ = ()

    async def lift_result(self, result: Result[E, A]) -> A:
        """Unwrap a Success, or abort the body with the Failure."""
        match result:
            case Success(v):
                return v
            case Failure(err):
                self._abort(err)
        raise TypeError(f"lift_result expects a Result, got {type(result).__name__}")

    async def from_async_op(self, operation: Awaitable[Result[E, A]]) -> A:
        """
        Await a Result-producing operation and unwrap it like lift_result.

        If awaiting the operation raises, the exception itself becomes the
        failure payload.
        """
        try:
            result = await operation
        except ShortCircuit:
            raise
        except Exception as e:
            self._abort(e)
        return await self.lift_result(result)

    def throw_e(self, error: E) -> NoReturn:
        """Abort the body with Failure(error)."""
        self._abort(error)


class AsyncResult(Generic[E, A]):
    """
    Deferred computation resolving to Result[E, A].

    Usage:
        >>> outcome = await AsyncResult(lambda h: h.lift_result(Success(5))).map(lambda v: v + 1)
        >>> outcome
        Success(6)
    """

    __slots__ = ("_body",)

    def __init__(self, body: AsyncResultBody[E, A]) -> None:
        self._body = body

    # ──────────────────────── Execution ────────────────────────

    async def run(self) -> Result[E, A]:
        """Execute the body from scratch and resolve to its Result. Never raises for body failures."""
        return await drive(self._body, AsyncResultHelpers(), "async_result")

    def __await__(self) -> Generator[Any, None, Result[E, A]]:
        return self.run().__await__()

    def __repr__(self) -> str:
        return f"AsyncResult({getattr(self._body, '__qualname__', self._body)!r})"

    # ──────────────────────── Combinators ────────────────────────

    def map(self, mapper: Callable[[A], Awaitable[B] | B]) -> AsyncResult[E, B]:
        """
        Transform the success value. `mapper` may be sync or async.
        On failure the mapper is never called.
        """

        async def body(helpers: AsyncResultHelpers[E]) -> B:
            value = await helpers.lift_result(await self.run())
            return await resolve(mapper(value))

        return AsyncResult(body)

    def map_left(self, mapper: Callable[[E], Awaitable[F] | F]) -> AsyncResult[F, A]:
        """Transform the failure payload. Success passes through untouched."""

        async def body(helpers: AsyncResultHelpers[F]) -> A:
            match await self.run():
                case Success(v):
                    return v
                case Failure(err):
                    helpers.throw_e(await resolve(mapper(err)))
            raise TypeError("unreachable")  # pragma: no cover

        return AsyncResult(body)

    def bimap(
        self,
        on_failure: Callable[[E], Awaitable[F] | F],
        on_success: Callable[[A], Awaitable[B] | B],
    ) -> AsyncResult[F, B]:
        """map_left and map in one step. Only the function for the actual track runs."""

        async def body(helpers: AsyncResultHelpers[F]) -> B:
            match await self.run():
                case Success(v):
                    return await resolve(on_success(v))
                case Failure(err):
                    helpers.throw_e(await resolve(on_failure(err)))
            raise TypeError("unreachable")  # pragma: no cover

        return AsyncResult(body)

    def chain(self, binder: Callable[[A], ResultLike[E, B]]) -> AsyncResult[E, B]:
        """
        Continue with another Result-producing step on success.

        `binder` may return a Result, an AsyncResult, or an awaitable
        resolving to a Result. It is not called until this computation has
        resolved, and never on failure.
        """

        async def body(helpers: AsyncResultHelpers[E]) -> B:
            value = await helpers.lift_result(await self.run())
            return await helpers.lift_result(await _adopt(binder(value)))

        return AsyncResult(body)

    def chain_left(self, binder: Callable[[E], ResultLike[F, A]]) -> AsyncResult[F, A]:
        """Recover a failure into a new computation. Success passes through."""

        async def body(helpers: AsyncResultHelpers[F]) -> A:
            match await self.run():
                case Success(v):
                    return v
                case Failure(err):
                    return await helpers.lift_result(await _adopt(binder(err)))
            raise TypeError("unreachable")  # pragma: no cover

        return AsyncResult(body)

    def recover(self, recovery_fn: Callable[[E], Awaitable[A] | A]) -> AsyncResult[Any, A]:
        """Turn a failure into a success value."""

        async def body(helpers: AsyncResultHelpers[Any]) -> A:
            match await self.run():
                case Success(v):
                    return v
                case Failure(err):
                    return await resolve(recovery_fn(err))
            raise TypeError("unreachable")  # pragma: no cover

        return AsyncResult(body)

    def swap(self) -> AsyncResult[A, E]:
        """Success(a) → Failure(a), Failure(e) → Success(e)."""

        async def body(helpers: AsyncResultHelpers[A]) -> E:
            return await helpers.lift_result((await self.run()).swap())

        return AsyncResult(body)

    def peek(self, action: Callable[[A], Any]) -> AsyncResult[E, A]:
        """Run a side effect on the success value; the outcome is unchanged."""

        async def body(helpers: AsyncResultHelpers[E]) -> A:
            value = await helpers.lift_result(await self.run())
            await resolve(action(value))
            return value

        return AsyncResult(body)

    def peek_failure(self, action: Callable[[E], Any]) -> AsyncResult[E, A]:
        """Run a side effect on the failure payload; the outcome is unchanged."""

        async def body(helpers: AsyncResultHelpers[E]) -> A:
            result = await self.run()
            if isinstance(result, Failure):
                await resolve(action(result.error()))
            return await helpers.lift_result(result)

        return AsyncResult(body)

    def void(self) -> AsyncResult[E, None]:
        """Discard the success value."""
        return self.map(lambda _: None)

    def to_async_option(self) -> AsyncOption[A]:
        """Success(v) → Present(v), Failure → Absent(). The failure payload is dropped."""

        async def body(helpers: Any) -> A:
            return await helpers.lift_option((await self.run()).to_option())

        return AsyncOption(body)

    # ──────────────────────── Folding ────────────────────────

    async def either(self, on_success: Callable[[A], R], on_failure: Callable[[E], R]) -> R:
        """Run, then apply one of two functions to the outcome."""
        return (await self.run()).either(on_success, on_failure)

    async def get_or_else(self, default: A) -> A:
        """Run and return the success value, or `default` on failure."""
        return (await self.run()).get_or_else(default)

    # ──────────────────────── Static Constructors ────────────────────────

    @staticmethod
    def lift_result(result: Result[E, A]) -> AsyncResult[E, A]:
        """An AsyncResult that resolves to an already computed Result."""

        async def body(helpers: AsyncResultHelpers[E]) -> A:
            return await helpers.lift_result(result)

        return AsyncResult(body)

    @staticmethod
    def success(value: A) -> AsyncResult[Any, A]:
        return AsyncResult.lift_result(Success(value))

    @staticmethod
    def failure(error: E) -> AsyncResult[E, Any]:
        return AsyncResult.lift_result(Failure(error))

    @staticmethod
    def lift_async_op(operation: Callable[[], Awaitable[A]]) -> AsyncResult[Exception, A]:
        """
        Wrap a zero-argument coroutine function producing a plain value.

            AsyncResult.lift_async_op(lambda: client.get(url))
        """
        return AsyncResult(lambda _: operation())

    @staticmethod
    def from_async_op(operation: Callable[[], Awaitable[Result[E, A]]]) -> AsyncResult[E | Exception, A]:
        """
        Wrap a zero-argument coroutine function producing a Result.

        An exception raised by the coroutine becomes Failure(exception).
        """

        async def body(helpers: AsyncResultHelpers[E]) -> A:
            return await helpers.from_async_op(operation())

        return AsyncResult(body)

    @staticmethod
    def sequence(items: Iterable[AsyncResult[E, A] | Result[E, A]]) -> AsyncResult[E, list[A]]:
        """
        Run each item strictly one after another and collect the payloads.

        The first failure wins and the remaining items are never started.
        Items must be AsyncResults or Results; a coroutine can only be awaited
        once and would break re-running, so it is rejected with TypeError.
        """
        steps = tuple(items)
        for step in steps:
            if not isinstance(step, (AsyncResult, Result)):
                raise TypeError(f"sequence expects AsyncResult or Result items, got {type(step).__name__}")

        async def body(helpers: AsyncResultHelpers[E]) -> list[A]:
            values: list[A] = []
            for step in steps:
                values.append(await helpers.lift_result(await _adopt(step)))
            return values

        return AsyncResult(body)


async def _adopt(outcome: ResultLike[E, A]) -> Result[E, A]:
    """Resolve one of the accepted continuation shapes to a Result."""
    match outcome:
        case Result():
            return outcome
        case AsyncResult():
            return await outcome.run()
        case Awaitable():
            resolved = await outcome
            if isinstance(resolved, Result):
                return resolved
            raise TypeError(f"Expected an awaitable of Result, it resolved to {type(resolved).__name__}")
    raise TypeError(
        f"Expected a Result, an AsyncResult or an awaitable of Result, got {type(outcome).__name__}"
    )
