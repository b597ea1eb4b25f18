"""Unit tests for the invocation engine."""

import asyncio

import pytest

from game_sdk.exceptions import (
    ArgumentCountError,
    ArgumentTypeError,
    RequestFailedError,
    TransportError,
)
from game_sdk.functions import Function, FunctionArgument, FunctionConfig
from game_sdk.invoker import Failure, FunctionInvoker, Success, validate_args
from game_sdk.transport import TransportResponse


@pytest.fixture
def greet_function():
    return Function(
        fn_name="greet",
        fn_description="Greet someone",
        args=[FunctionArgument("name", "Who to greet")],
        config=FunctionConfig(
            method="POST",
            url="https://api.example.com/greet/{{name}}",
            headers={"Authorization": "Bearer static", "X-Target": "{{name}}"},
            payload={"greeting": "Hello {{name}}", "times": 2},
            success_feedback="Greeted {{name}}: {{response.status}}",
            error_feedback="Could not greet {{name}}: {{response.error}}",
        ),
    )


class TestValidateArgs:
    """Tests for argument validation."""

    @pytest.mark.parametrize("values", [[], ["a", ["b"], True], ["a", ["b"], True, 1, "extra"]])
    def test_wrong_count(self, echo_function, values):
        with pytest.raises(ArgumentCountError) as exc_info:
            validate_args(echo_function, values)

        assert exc_info.value.expected == 4
        assert exc_info.value.received == len(values)

    @pytest.mark.parametrize("value", [123, None, ["a"], {"a": 1}])
    def test_string_argument_rejects_non_strings(self, echo_function, value):
        with pytest.raises(ArgumentTypeError) as exc_info:
            validate_args(echo_function, [value, [], True, 1])

        assert exc_info.value.argument == "name"
        assert exc_info.value.expected_type == "string"
        assert "Argument name must be a string" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["abc", 5, {"a": 1}, None])
    def test_array_argument_rejects_non_sequences(self, echo_function, value):
        with pytest.raises(ArgumentTypeError, match="tags must be an array"):
            validate_args(echo_function, ["ada", value, True, 1])

    def test_argument_type_error_is_type_error(self, echo_function):
        with pytest.raises(TypeError):
            validate_args(echo_function, [1, [], True, 1])

    def test_boolean_and_number_are_not_checked(self, echo_function):
        named = validate_args(echo_function, ["ada", ("x", "y"), "yes", "many"])
        assert named == {"name": "ada", "tags": ("x", "y"), "loud": "yes", "times": "many"}

    def test_builds_named_map_in_order(self, echo_function):
        named = validate_args(echo_function, ["ada", ["x"], False, 0])
        assert list(named) == ["name", "tags", "loud", "times"]


class TestInvoke:
    """Tests for FunctionInvoker.invoke."""

    @pytest.mark.asyncio
    async def test_assembles_request(self, invoker, mock_transport, greet_function):
        await invoker.invoke(greet_function, "ada")

        mock_transport.request.assert_awaited_once_with(
            "POST",
            "https://api.example.com/greet/ada",
            headers={"Authorization": "Bearer static", "X-Target": "ada"},
            json={"greeting": "Hello ada", "times": 2},
        )

    @pytest.mark.asyncio
    async def test_argument_errors_skip_transport(self, invoker, mock_transport, greet_function):
        with pytest.raises(ArgumentCountError):
            await invoker.invoke(greet_function)
        with pytest.raises(ArgumentTypeError):
            await invoker.invoke(greet_function, 42)

        mock_transport.request.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [200, 201, 299])
    async def test_2xx_is_success(self, invoker, mock_transport, greet_function, status_code):
        mock_transport.request.return_value = TransportResponse(status_code, {"status": "ok"})

        result = await invoker.invoke(greet_function, "ada")

        assert isinstance(result, Success)
        assert result.ok is True
        assert result.body == {"status": "ok"}
        assert result.status_code == status_code

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [300, 404, 500])
    async def test_other_status_is_failure(self, invoker, mock_transport, greet_function, status_code):
        mock_transport.request.return_value = TransportResponse(status_code, {"error": "nope"})

        result = await invoker.invoke(greet_function, "ada")

        assert isinstance(result, Failure)
        assert result.ok is False
        assert result.reason == {"error": "nope"}
        assert result.status_code == status_code

    @pytest.mark.asyncio
    async def test_failure_without_body(self, invoker, mock_transport, greet_function):
        mock_transport.request.return_value = TransportResponse(502, None)

        result = await invoker.invoke(greet_function, "ada")

        assert result.reason == "HTTP 502"

    @pytest.mark.asyncio
    async def test_transport_error_is_failure(self, invoker, mock_transport, greet_function):
        error = TransportError("Request failed: connection refused")
        mock_transport.request.side_effect = error

        result = await invoker.invoke(greet_function, "ada")

        assert isinstance(result, Failure)
        assert result.reason == "Request failed: connection refused"
        assert result.error is error

    @pytest.mark.asyncio
    async def test_transport_error_prefers_response_data(self, invoker, mock_transport, greet_function):
        mock_transport.request.side_effect = TransportError("boom", response_data={"error": "partial"})

        result = await invoker.invoke(greet_function, "ada")

        assert result.reason == {"error": "partial"}

    @pytest.mark.asyncio
    async def test_get_without_payload_sends_no_body(self, invoker, mock_transport):
        function = Function(
            fn_name="lookup",
            fn_description="",
            args=[FunctionArgument("id", "")],
            config=FunctionConfig(method="GET", url="https://api.example.com/items/{{id}}"),
        )

        await invoker.invoke(function, "7")

        mock_transport.request.assert_awaited_once_with(
            "GET", "https://api.example.com/items/7", headers={}, json=None
        )

    @pytest.mark.asyncio
    async def test_concurrent_invocations_are_independent(self, invoker, mock_transport, greet_function):
        await asyncio.gather(*(invoker.invoke(greet_function, name) for name in ["a", "b", "c"]))

        urls = sorted(call.args[1] for call in mock_transport.request.await_args_list)
        assert urls == [
            "https://api.example.com/greet/a",
            "https://api.example.com/greet/b",
            "https://api.example.com/greet/c",
        ]


class TestFeedback:
    """Tests for success/error feedback emission."""

    @pytest.mark.asyncio
    async def test_success_feedback(self, invoker, mock_transport, feedback, greet_function):
        mock_transport.request.return_value = TransportResponse(200, {"status": "sent"})

        await invoker.invoke(greet_function, "ada")

        feedback.assert_called_once_with("Greeted ada: sent")

    @pytest.mark.asyncio
    async def test_error_feedback(self, invoker, mock_transport, feedback, greet_function):
        mock_transport.request.return_value = TransportResponse(400, {"error": "bad name"})

        await invoker.invoke(greet_function, "ada")

        feedback.assert_called_once_with("Could not greet ada: bad name")

    @pytest.mark.asyncio
    async def test_no_template_no_feedback(self, invoker, feedback):
        function = Function(
            fn_name="ping",
            fn_description="",
            config=FunctionConfig(url="https://api.example.com/ping"),
        )

        await invoker.invoke(function)

        feedback.assert_not_called()

    @pytest.mark.asyncio
    async def test_feedback_error_does_not_mask_result(self, mock_transport, greet_function):
        def broken_feedback(message):
            raise RuntimeError("handler exploded")

        invoker = FunctionInvoker(transport=mock_transport, feedback=broken_feedback)
        mock_transport.request.return_value = TransportResponse(200, {"status": "sent"})

        result = await invoker.invoke(greet_function, "ada")

        assert result.ok is True

    @pytest.mark.asyncio
    async def test_default_feedback_logs(self, mock_transport, greet_function, caplog):
        invoker = FunctionInvoker(transport=mock_transport)
        mock_transport.request.return_value = TransportResponse(200, {"status": "sent"})

        with caplog.at_level("INFO", logger="game_sdk.feedback"):
            await invoker.invoke(greet_function, "ada")

        assert "Greeted ada: sent" in caplog.text


class TestExecute:
    """Tests for FunctionInvoker.execute."""

    @pytest.mark.asyncio
    async def test_returns_body(self, invoker, mock_transport, greet_function):
        mock_transport.request.return_value = TransportResponse(200, {"status": "sent"})

        assert await invoker.execute(greet_function, "ada") == {"status": "sent"}

    @pytest.mark.asyncio
    async def test_raises_request_failed(self, invoker, mock_transport, greet_function):
        mock_transport.request.return_value = TransportResponse(403, {"error": "forbidden"})

        with pytest.raises(RequestFailedError) as exc_info:
            await invoker.execute(greet_function, "ada")

        assert exc_info.value.reason == {"error": "forbidden"}
        assert exc_info.value.status_code == 403
        assert str(exc_info.value) == '[request_failed] Request failed: {"error": "forbidden"}'

    @pytest.mark.asyncio
    async def test_chains_transport_error(self, invoker, mock_transport, greet_function):
        error = TransportError("Request timed out")
        mock_transport.request.side_effect = error

        with pytest.raises(RequestFailedError) as exc_info:
            await invoker.execute(greet_function, "ada")

        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_close_closes_transport(self, mock_transport):
        async with FunctionInvoker(transport=mock_transport):
            pass

        mock_transport.close.assert_awaited_once()
