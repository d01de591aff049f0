"""
AsyncOption — a lazy, re-runnable asynchronous Option.

The optional counterpart of AsyncResult, driven by the same machinery:

    async def find_email(h: AsyncOptionHelpers) -> str:
        user = await h.from_async_op(users.find(user_id))   # coroutine yielding an Option
        return await h.lift_option(Option.of(user.email))

    email = await AsyncOption(find_email).run()              # Present(...) or Absent()

Any abort, and any exception raised by the body, resolves to Absent().
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, Callable, Generator, Generic, NoReturn, TypeVar, Union

from switchyard._driver import ShortCircuit, SignalOwner, drive, resolve
from switchyard.option import Absent, Option, Present

if TYPE_CHECKING:
    from switchyard.async_result import AsyncResult

A = TypeVar("A")
B = TypeVar("B")
E = TypeVar("E")

AsyncOptionBody = Callable[["AsyncOptionHelpers"], Union[Awaitable[A], A]]
OptionLike = Union[Option[A], "AsyncOption[A]", Awaitable[Option[A]]]


class AsyncOptionHelpers(SignalOwner):
    """Absence-channel operations available inside an AsyncOption body."""

    __slots__ = ()

    async def lift_option(self, option: Option[A]) -> A:
        """Unwrap a Present, or abort the body on Absent."""
        match option:
            case Present(v):
                return v
            case Absent():
                self._abort(None)
        raise TypeError(f"lift_option expects an Option, got {type(option).__name__}")

    async def from_async_op(self, operation: Awaitable[Option[A]]) -> A:
        """Await an Option-producing operation; if it raises, abort the body."""
        try:
            option = await operation
        except ShortCircuit:
            raise
        except Exception as e:
            self._abort(e)
        return await self.lift_option(option)

    def throw_absent(self) -> NoReturn:
        self._abort(None)


class AsyncOption(Generic[A]):
    """Deferred computation resolving to Option[A]."""

    __slots__ = ("_body",)

    def __init__(self, body: AsyncOptionBody[A]) -> None:
        self._body = body

    async def run(self) -> Option[A]:
        return (await drive(self._body, AsyncOptionHelpers(), "async_option")).to_option()

    def __await__(self) -> Generator[Any, None, Option[A]]:
        return self.run().__await__()

    def __repr__(self) -> str:
        return f"AsyncOption({getattr(self._body, '__qualname__', self._body)!r})"

    def map(self, mapper: Callable[[A], Awaitable[B] | B]) -> AsyncOption[B]:
        async def body(helpers: AsyncOptionHelpers) -> B:
            value = await helpers.lift_option(await self.run())
            return await resolve(mapper(value))

        return AsyncOption(body)

    def chain(self, binder: Callable[[A], OptionLike[B]]) -> AsyncOption[B]:
        """Continue with an Option, AsyncOption or awaitable of Option when present."""

        async def body(helpers: AsyncOptionHelpers) -> B:
            value = await helpers.lift_option(await self.run())
            return await helpers.lift_option(await _adopt(binder(value)))

        return AsyncOption(body)

    def filter(self, predicate: Callable[[A], bool]) -> AsyncOption[A]:
        async def body(helpers: AsyncOptionHelpers) -> A:
            return await helpers.lift_option((await self.run()).filter(predicate))

        return AsyncOption(body)

    def to_async_result(self, error: E) -> AsyncResult[E, A]:
        """Present(v) → Success(v), Absent() → Failure(error)."""
        from switchyard.async_result import AsyncResult

        async def body(helpers: Any) -> A:
            return await helpers.lift_result((await self.run()).to_result(error))

        return AsyncResult(body)

    async def get_or_else(self, default: A) -> A:
        return (await self.run()).get_or_else(default)

    @staticmethod
    def lift_option(option: Option[A]) -> AsyncOption[A]:
        async def body(helpers: AsyncOptionHelpers) -> A:
            return await helpers.lift_option(option)

        return AsyncOption(body)

    @staticmethod
    def present(value: A) -> AsyncOption[A]:
        return AsyncOption.lift_option(Present(value))

    @staticmethod
    def absent() -> AsyncOption[Any]:
        return AsyncOption.lift_option(Absent())

    @staticmethod
    def lift_async_op(operation: Callable[[], Awaitable[A]]) -> AsyncOption[A]:
        """Present with the coroutine's value, or Absent if it raises."""
        return AsyncOption(lambda _: operation())

    @staticmethod
    def from_async_op(operation: Callable[[], Awaitable[Option[A]]]) -> AsyncOption[A]:
        async def body(helpers: AsyncOptionHelpers) -> A:
            return await helpers.from_async_op(operation())

        return AsyncOption(body)


async def _adopt(outcome: OptionLike[A]) -> Option[A]:
    match outcome:
        case Option():
            return outcome
        case AsyncOption():
            return await outcome.run()
        case Awaitable():
            resolved = await outcome
            if isinstance(resolved, Option):
                return resolved
            raise TypeError(f"Expected an awaitable of Option, it resolved to {type(resolved).__name__}")
    raise TypeError(f"Expected an Option, an AsyncOption or an awaitable of Option, got {type(outcome).__name__}")
