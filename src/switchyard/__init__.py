"""
switchyard — composable Result, Option and lazy async computations.

Explicit failure values instead of exceptions for ordinary control flow,
with an async computation type whose body reads like plain async code:

    from switchyard import AsyncResult, Failure, Success

    async def checkout(h):
        cart = await h.from_async_op(carts.load(cart_id))   # coroutine → Result
        if not cart.items:
            h.throw_e("empty cart")
        return await payments.charge(cart.total)             # raising → Failure(exc)

    result = await AsyncResult(checkout).map(receipt_for).run()
    match result:
        case Success(receipt): ...
        case Failure(error): ...
"""

from switchyard.result import Result, Success, Failure
from switchyard.option import Option, Present, Absent
from switchyard.nonempty import NonEmptyList
from switchyard.failure import ErrorCode, FailureDescription
from switchyard.async_option import AsyncOption, AsyncOptionHelpers
from switchyard.async_result import AsyncResult, AsyncResultHelpers
from switchyard.assertions import ResultAssertions
from switchyard.config import SwitchyardSettings, get_settings
from switchyard.logs import configure_structlog

__all__ = [
    "Result",
    "Success",
    "Failure",
    "Option",
    "Present",
    "Absent",
    "NonEmptyList",
    "ErrorCode",
    "FailureDescription",
    "AsyncResult",
    "AsyncResultHelpers",
    "AsyncOption",
    "AsyncOptionHelpers",
    "ResultAssertions",
    "SwitchyardSettings",
    "get_settings",
    "configure_structlog",
]

__version__ = "1.0.0"
