import pytest

from urlmapping.errors import TypeConversionError
from urlmapping.http_handler.exception_handler import LoggingExceptionHandler
from urlmapping.routing.variable_types import VariableType


class FakeResponseSender:
    def __init__(self):
        self.calls = []

    async def send_detail(self, send, status_code, detail, headers=None):
        self.calls.append({"status_code": status_code, "detail": detail})


@pytest.mark.asyncio
async def test__logging_exception_handler_handle__when_unexpected_error__logs_and_sends_500(
    mocker,
):
    # ARRANGE
    response_sender = FakeResponseSender()
    exception_handler = LoggingExceptionHandler(response_sender)
    logger = mocker.patch("urlmapping.http_handler.exception_handler.LOGGER")
    error = RuntimeError("boom")

    # ACT
    await exception_handler.handle({}, None, error)

    # ASSERT
    assert response_sender.calls == [
        {"status_code": 500, "detail": "Internal Server Error"}
    ]
    assert logger.exception.called


@pytest.mark.asyncio
async def test__logging_exception_handler_handle__when_type_conversion_error__sends_400():
    # ARRANGE
    response_sender = FakeResponseSender()
    exception_handler = LoggingExceptionHandler(response_sender)
    error = TypeConversionError("id", "99999999999", VariableType.INTEGER)

    # ACT
    await exception_handler.handle(
        {"method": "GET", "path": "/products/99999999999"}, None, error
    )

    # ASSERT
    assert response_sender.calls == [{"status_code": 400, "detail": "Bad Request"}]
