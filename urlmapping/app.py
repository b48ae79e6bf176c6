import orjson

from urlmapping.http_handler.exception_handler import (
    ExceptionHandler,
    LoggingExceptionHandler,
)
from urlmapping.http_handler.handler import HTTPHandler
from urlmapping.http_handler.request import HTTPRequestConstructor
from urlmapping.http_handler.request_handlers.default_request_handler import (
    DefaultRequestHandler,
)
from urlmapping.http_handler.request_handlers.head_request_handler import (
    HeadRequestHandler,
)
from urlmapping.http_handler.request_handlers.response_sender import ResponseSender
from urlmapping.routing.router import HTTPMethod, Router


def build_http_handler(
    router: Router, exception_handler: ExceptionHandler = None
) -> HTTPHandler:
    response_sender = ResponseSender(orjson)
    return HTTPHandler(
        router=router,
        response_sender=response_sender,
        http_request_constructor=HTTPRequestConstructor(),
        head_request_handler=HeadRequestHandler(response_sender),
        default_request_handler=DefaultRequestHandler(response_sender),
        exception_handler=exception_handler or LoggingExceptionHandler(response_sender),
    )


class App:
    """ASGI application answering requests through a Router.

    Handlers are called as ``handler(request, match)`` and may be plain
    functions or coroutines.
    """

    def __init__(
        self,
        router: Router = None,
        use_trailing_slash_match: bool = None,
        exception_handler: ExceptionHandler = None,
        http_handler: HTTPHandler = None,
    ):
        if router is not None and use_trailing_slash_match is not None:
            raise ValueError(
                "use_trailing_slash_match cannot be combined with a router, "
                "configure it on the Router instead"
            )
        if router is None:
            router = Router(
                True if use_trailing_slash_match is None else use_trailing_slash_match
            )
        if http_handler is None:
            http_handler = build_http_handler(router, exception_handler)
        self.http_handler = http_handler

    @property
    def router(self) -> Router:
        return self.http_handler.router

    def add_router(self, router: Router):
        self.http_handler.router = router

    def set_exception_handler(self, exception_handler: ExceptionHandler):
        self.http_handler.exception_handler = exception_handler

    def get(self, pattern: str, *types, name: str = ""):
        return self.http_handler.router.route(HTTPMethod.GET, pattern, *types, name=name)

    def post(self, pattern: str, *types, name: str = ""):
        return self.http_handler.router.route(
            HTTPMethod.POST, pattern, *types, name=name
        )

    def put(self, pattern: str, *types, name: str = ""):
        return self.http_handler.router.route(HTTPMethod.PUT, pattern, *types, name=name)

    def delete(self, pattern: str, *types, name: str = ""):
        return self.http_handler.router.route(
            HTTPMethod.DELETE, pattern, *types, name=name
        )

    def head(self, pattern: str, *types, name: str = ""):
        return self.http_handler.router.route(
            HTTPMethod.HEAD, pattern, *types, name=name
        )

    def options(self, pattern: str, *types, name: str = ""):
        return self.http_handler.router.route(
            HTTPMethod.OPTIONS, pattern, *types, name=name
        )

    def trace(self, pattern: str, *types, name: str = ""):
        return self.http_handler.router.route(
            HTTPMethod.TRACE, pattern, *types, name=name
        )

    async def __call__(self, scope, receive, send):
        assert scope["type"] == "http"

        if scope["type"] == "http":
            await self.http_handler.handle(scope, receive, send)
