import inspect
import logging

from urlmapping.errors import UnsupportedMethod
from urlmapping.http_handler.exception_handler import ExceptionHandler
from urlmapping.http_handler.request import HTTPRequestConstructor
from urlmapping.http_handler.request_handlers.default_request_handler import (
    DefaultRequestHandler,
)
from urlmapping.http_handler.request_handlers.head_request_handler import (
    HeadRequestHandler,
)
from urlmapping.http_handler.request_handlers.response_sender import ResponseSender
from urlmapping.routing.router import HTTPMethod, Router

LOGGER = logging.getLogger(__name__)

ALLOWED_METHODS = b", ".join(method.value.encode("utf-8") for method in HTTPMethod)


def path_info(scope) -> str:
    path = scope.get("path", "")
    root_path = scope.get("root_path", "")
    if root_path and (path == root_path or path.startswith(root_path + "/")):
        path = path[len(root_path) :]
    return path


class HTTPHandler:
    def __init__(
        self,
        router: Router,
        response_sender: ResponseSender,
        http_request_constructor: HTTPRequestConstructor,
        head_request_handler: HeadRequestHandler,
        default_request_handler: DefaultRequestHandler,
        exception_handler: ExceptionHandler,
    ):
        self.router = router
        self.response_sender = response_sender
        self.http_request_constructor = http_request_constructor
        self.head_request_handler = head_request_handler
        self.default_request_handler = default_request_handler
        self.exception_handler = exception_handler

    async def handle(self, scope, receive, send):
        path = path_info(scope)
        method = scope["method"]

        try:
            match = self.router.match(method, path)
        except UnsupportedMethod:
            return await self.response_sender.send_detail(
                send, 405, "Method Not Allowed", headers=[(b"allow", ALLOWED_METHODS)]
            )
        except Exception as e:
            return await self.exception_handler.handle(scope, send, e)

        if match.is_not_found or match.handler is None:
            return await self.response_sender.send_detail(send, 404, "Not Found")

        http_request = await self.http_request_constructor.construct(
            scope, receive, path, match
        )
        try:
            result = match.handler(http_request, match)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            return await self.exception_handler.handle(scope, send, e)

        if HTTPMethod.parse(method) is HTTPMethod.HEAD:
            return await self.head_request_handler.handle(send, result)
        return await self.default_request_handler.handle(send, result)
