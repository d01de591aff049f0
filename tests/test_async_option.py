"""Tests for AsyncOption — the lazy asynchronous Option."""

from __future__ import annotations

import asyncio

import pytest

from switchyard import Absent, AsyncOption, Failure, Option, Present, Success


async def resolved(value):
    await asyncio.sleep(0)
    return value


async def rejected(error: Exception):
    await asyncio.sleep(0)
    raise error


class TestHelpers:
    @pytest.mark.asyncio
    async def test_lift_option_present(self):
        async def body(h):
            return await h.lift_option(Present(5)) + 1

        assert await AsyncOption(body).run() == Present(6)

    @pytest.mark.asyncio
    async def test_lift_option_absent_short_circuits(self):
        reached: list[bool] = []

        async def body(h):
            await h.lift_option(Absent())
            reached.append(True)
            return 1

        assert await AsyncOption(body).run() == Absent()
        assert reached == []

    @pytest.mark.asyncio
    async def test_from_async_op(self):
        assert await AsyncOption(lambda h: h.from_async_op(resolved(Present(5)))).run() == Present(5)
        assert await AsyncOption(lambda h: h.from_async_op(resolved(Absent()))).run() == Absent()
        assert await AsyncOption(lambda h: h.from_async_op(rejected(RuntimeError()))).run() == Absent()

    @pytest.mark.asyncio
    async def test_throw_absent(self):
        assert await AsyncOption(lambda h: h.throw_absent()).run() == Absent()

    @pytest.mark.asyncio
    async def test_raised_exception_is_absent(self):
        def body(h):
            raise ValueError("boom")

        assert await AsyncOption(body).run() == Absent()

    @pytest.mark.asyncio
    async def test_await_instance(self):
        assert await AsyncOption(lambda h: resolved(None)) == Present(None)


class TestCombinators:
    @pytest.mark.asyncio
    async def test_map(self):
        assert await AsyncOption.present(2).map(lambda v: v * 3).run() == Present(6)
        assert await AsyncOption.absent().map(lambda v: v * 3).run() == Absent()

    @pytest.mark.asyncio
    async def test_map_async(self):
        async def triple(v):
            return v * 3

        assert await AsyncOption.present(2).map(triple).run() == Present(6)

    @pytest.mark.asyncio
    async def test_chain_accepts_all_shapes(self):
        present = AsyncOption.present(2)
        assert await present.chain(lambda v: Present(v + 1)).run() == Present(3)
        assert await present.chain(lambda v: AsyncOption.present(v + 2)).run() == Present(4)
        assert await present.chain(lambda v: resolved(Present(v + 3))).run() == Present(5)
        assert await present.chain(lambda v: Absent()).run() == Absent()

    @pytest.mark.asyncio
    async def test_chain_unsupported_shape_is_absent(self):
        assert await AsyncOption.present(2).chain(lambda v: v).run() == Absent()

    @pytest.mark.asyncio
    async def test_filter(self):
        assert await AsyncOption.present(4).filter(lambda v: v > 3).run() == Present(4)
        assert await AsyncOption.present(2).filter(lambda v: v > 3).run() == Absent()

    @pytest.mark.asyncio
    async def test_to_async_result(self):
        assert await AsyncOption.present(1).to_async_result("missing").run() == Success(1)
        assert await AsyncOption.absent().to_async_result("missing").run() == Failure("missing")

    @pytest.mark.asyncio
    async def test_get_or_else(self):
        assert await AsyncOption.present(1).get_or_else(0) == 1
        assert await AsyncOption.absent().get_or_else(0) == 0


class TestStaticConstructors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("option", [Present(1), Absent()])
    async def test_lift_option_round_trips(self, option: Option):
        assert await AsyncOption.lift_option(option).run() == option

    @pytest.mark.asyncio
    async def test_lift_async_op(self):
        assert await AsyncOption.lift_async_op(lambda: resolved(5)).run() == Present(5)
        assert await AsyncOption.lift_async_op(lambda: rejected(KeyError())).run() == Absent()

    @pytest.mark.asyncio
    async def test_from_async_op(self):
        assert await AsyncOption.from_async_op(lambda: resolved(Present(5))).run() == Present(5)
        assert await AsyncOption.from_async_op(lambda: rejected(KeyError())).run() == Absent()

    @pytest.mark.asyncio
    async def test_reruns_each_time(self):
        calls = {"count": 0}

        async def body(h):
            calls["count"] += 1
            return calls["count"]

        ao = AsyncOption(body)
        assert await ao.run() == Present(1)
        assert await ao.run() == Present(2)
