"""
Invocation engine for function descriptors.

Each call runs one linear pipeline: validate the positional values,
assemble the request from the function's template, dispatch it through
the transport, classify the outcome and emit the feedback message.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from game_sdk.exceptions import (
    ArgumentCountError,
    ArgumentTypeError,
    RequestFailedError,
    TransportError,
)
from game_sdk.functions import ArgumentType, Function
from game_sdk.templating import interpolate
from game_sdk.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)
feedback_logger = logging.getLogger("game_sdk.feedback")

FeedbackCallback = Callable[[str], None]

BODYLESS_METHODS = ("GET", "HEAD", "DELETE")


@dataclass(frozen=True)
class Success:
    """A call that returned a 2xx response."""
    body: Any
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.body


@dataclass(frozen=True)
class Failure:
    """A call that returned a non-2xx response or never completed."""
    reason: Any
    status_code: Optional[int] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        """Raise RequestFailedError carrying the failure reason."""
        raise RequestFailedError(self.reason, status_code=self.status_code) from self.error


InvocationResult = Union[Success, Failure]


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


def validate_args(function: Function, values: Sequence) -> Dict[str, Any]:
    """
    Check positional values against the function's declared arguments.

    Only ``string`` and ``array`` arguments are type-checked.

    Returns:
        Mapping of argument name to value, in declaration order

    Raises:
        ArgumentCountError: If the number of values is wrong
        ArgumentTypeError: If a value does not match its declared type
    """
    if len(values) != len(function.args):
        raise ArgumentCountError(function.fn_name, len(function.args), len(values))

    named_args: Dict[str, Any] = {}
    for arg, value in zip(function.args, values):
        if arg.type == ArgumentType.STRING and not isinstance(value, str):
            raise ArgumentTypeError(arg.name, arg.type.value, value)
        if arg.type == ArgumentType.ARRAY and (
            not isinstance(value, Sequence) or isinstance(value, (str, bytes))
        ):
            raise ArgumentTypeError(arg.name, arg.type.value, value)
        named_args[arg.name] = value
    return named_args


class FunctionInvoker:
    """
    Invokes function descriptors over HTTP.

    Args:
        transport: HTTP transport; an HttpxTransport is created when omitted
        feedback: Receives rendered feedback messages; defaults to logging
            them on the ``game_sdk.feedback`` logger

    Example:
        >>> invoker = FunctionInvoker()
        >>> result = await invoker.invoke(send_message, "123", "hi")
        >>> if result.ok:
        ...     print(result.body)
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        feedback: Optional[FeedbackCallback] = None,
    ):
        self.transport = transport or HttpxTransport()
        self._feedback = feedback or feedback_logger.info

    async def invoke(self, function: Function, *args: Any) -> InvocationResult:
        """
        Validate, dispatch and classify one call of ``function``.

        Argument errors are raised before any request is made. Request
        failures are returned as Failure, never raised.
        """
        named_args = validate_args(function, args)
        config = function.config

        url = config.build_url(named_args)
        headers = config.build_headers(named_args)
        payload = config.build_payload(named_args)
        body = None if (config.method in BODYLESS_METHODS and not payload) else payload

        logger.debug(f"Invoking {function.fn_name}: {config.method} {url}")

        try:
            response = await self.transport.request(
                config.method, url, headers=headers, json=body
            )
        except TransportError as e:
            reason = e.response_data if e.response_data is not None else e.message
            logger.warning(f"{function.fn_name} failed: {e.message}")
            result: InvocationResult = Failure(reason=reason, error=e)
        else:
            if is_success_status(response.status_code):
                result = Success(body=response.data, status_code=response.status_code)
            else:
                reason = response.data if response.data not in (None, "") else f"HTTP {response.status_code}"
                logger.warning(f"{function.fn_name} returned HTTP {response.status_code}")
                result = Failure(reason=reason, status_code=response.status_code)

        self._emit_feedback(function, named_args, result)
        return result

    async def execute(self, function: Function, *args: Any) -> Any:
        """
        Invoke ``function`` and return the response body.

        Raises:
            RequestFailedError: If the call did not succeed
        """
        result = await self.invoke(function, *args)
        return result.unwrap()

    def _emit_feedback(
        self,
        function: Function,
        named_args: Dict[str, Any],
        result: InvocationResult,
    ) -> None:
        if isinstance(result, Success):
            template = function.config.success_feedback
            response = result.body
        else:
            template = function.config.error_feedback
            response = result.reason

        if not template:
            return

        try:
            self._feedback(interpolate(template, {**named_args, "response": response}))
        except Exception as e:
            logger.error(f"Feedback handler error for {function.fn_name}: {e}")

    async def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "FunctionInvoker":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
