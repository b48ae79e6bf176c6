import logging
from abc import ABC, abstractmethod

from urlmapping.errors import TypeConversionError
from urlmapping.http_handler.request_handlers.response_sender import ResponseSender

LOGGER = logging.getLogger(__name__)


class ExceptionHandler(ABC):
    @abstractmethod
    async def handle(self, scope, send, exception: Exception):
        """Answer a request whose matching or handling raised ``exception``."""


class LoggingExceptionHandler(ExceptionHandler):
    def __init__(self, response_sender: ResponseSender):
        self.response_sender = response_sender

    async def handle(self, scope, send, exception: Exception):
        if isinstance(exception, TypeConversionError):
            LOGGER.warning(
                f"{scope.get('method')} {scope.get('path')}: {exception}"
            )
            return await self.response_sender.send_detail(send, 400, "Bad Request")

        LOGGER.exception(exception, exc_info=exception)
        return await self.response_sender.send_detail(
            send, 500, "Internal Server Error"
        )
