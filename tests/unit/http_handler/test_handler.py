import orjson
import pytest

from urlmapping.http_handler.handler import HTTPHandler, path_info
from urlmapping.http_handler.request import HTTPRequestConstructor
from urlmapping.http_handler.request_handlers.response_sender import ResponseSender
from urlmapping.routing.router import Router


class FakeSend:
    def __init__(self):
        self.calls = []

    async def __call__(self, message):
        self.calls.append(message)


class FakeReceive:
    async def __call__(self):
        return {"body": b"", "more_body": False}


class FakeRequestHandler:
    def __init__(self):
        self.calls = []

    async def handle(self, send, result):
        self.calls.append({"send": send, "result": result})


class FakeExceptionHandler:
    def __init__(self):
        self.calls = []

    async def handle(self, scope, send, exception):
        self.calls.append(exception)


def make_handler(router):
    return HTTPHandler(
        router=router,
        response_sender=ResponseSender(orjson),
        http_request_constructor=HTTPRequestConstructor(),
        head_request_handler=FakeRequestHandler(),
        default_request_handler=FakeRequestHandler(),
        exception_handler=FakeExceptionHandler(),
    )


def make_scope(method, path, root_path=""):
    return {
        "type": "http",
        "method": method,
        "path": path,
        "root_path": root_path,
        "query_string": b"",
        "headers": [],
    }


@pytest.mark.parametrize(
    "path,root_path,expected",
    [
        ("/api/products", "/api", "/products"),
        ("/products", "", "/products"),
        ("/api", "/api", ""),
        ("/other/products", "/api", "/other/products"),
        ("/apiary/x", "/api", "/apiary/x"),
    ],
)
def test__path_info__strips_root_path(path, root_path, expected):
    # ACT
    result = path_info({"path": path, "root_path": root_path})

    # ASSERT
    assert result == expected


@pytest.mark.asyncio
async def test__http_handler_handle__when_no_route_matches__sends_404_response():
    # ARRANGE
    http_handler = make_handler(Router())
    send = FakeSend()

    # ACT
    await http_handler.handle(make_scope("GET", "/path"), FakeReceive(), send)

    # ASSERT
    assert send.calls[0]["status"] == 404
    assert orjson.loads(send.calls[1]["body"]) == {"detail": "Not Found"}


@pytest.mark.asyncio
async def test__http_handler_handle__when_route_has_no_handler__sends_404_response():
    # ARRANGE
    http_handler = make_handler(Router().get("named", "/path"))
    send = FakeSend()

    # ACT
    await http_handler.handle(make_scope("GET", "/path"), FakeReceive(), send)

    # ASSERT
    assert send.calls[0]["status"] == 404


@pytest.mark.asyncio
async def test__http_handler_handle__when_method_unsupported__sends_405_response():
    # ARRANGE
    http_handler = make_handler(Router())
    send = FakeSend()

    # ACT
    await http_handler.handle(make_scope("PATCH", "/path"), FakeReceive(), send)

    # ASSERT
    assert send.calls[0]["status"] == 405
    assert (b"allow", b"GET, POST, PUT, DELETE, HEAD, OPTIONS, TRACE") in send.calls[
        0
    ]["headers"]


@pytest.mark.asyncio
async def test__http_handler_handle__when_async_handler__awaits_and_sends_result():
    # ARRANGE
    router = Router()

    async def show(request, match):
        return {"id": match.variable("id"), "path": request.path}

    router.get("show", "/products/{id}", show, int)
    http_handler = make_handler(router)

    # ACT
    await http_handler.handle(
        make_scope("GET", "/api/products/13", "/api"), FakeReceive(), "send"
    )

    # ASSERT
    assert http_handler.default_request_handler.calls == [
        {"send": "send", "result": {"id": 13, "path": "/products/13"}}
    ]


@pytest.mark.asyncio
async def test__http_handler_handle__builds_request_from_scope_and_match():
    # ARRANGE
    router = Router()

    def search(request, match):
        return [
            request.route_name,
            request.path_variable("category"),
            request.query_param("q"),
        ]

    router.get("search", "/categories/{category}/search", search)
    http_handler = make_handler(router)
    scope = make_scope("GET", "/categories/shoes/search")
    scope["query_string"] = b"q=red%20boots"

    # ACT
    await http_handler.handle(scope, FakeReceive(), "send")

    # ASSERT
    assert http_handler.default_request_handler.calls[0]["result"] == [
        "search",
        "shoes",
        "red boots",
    ]


@pytest.mark.asyncio
async def test__http_handler_handle__when_sync_handler__sends_result():
    # ARRANGE
    router = Router()
    router.post("create", "/products", lambda request, match: "created")
    http_handler = make_handler(router)

    # ACT
    await http_handler.handle(make_scope("post", "/products/"), FakeReceive(), "send")

    # ASSERT
    assert http_handler.default_request_handler.calls[0]["result"] == "created"


@pytest.mark.asyncio
async def test__http_handler_handle__when_head__uses_head_request_handler():
    # ARRANGE
    router = Router()
    router.head("", "/products", lambda request, match: "list")
    http_handler = make_handler(router)

    # ACT
    await http_handler.handle(make_scope("HEAD", "/products"), FakeReceive(), "send")

    # ASSERT
    assert http_handler.head_request_handler.calls[0]["result"] == "list"
    assert http_handler.default_request_handler.calls == []


@pytest.mark.asyncio
async def test__http_handler_handle__when_handler_raises__calls_exception_handler():
    # ARRANGE
    router = Router()
    error = RuntimeError("boom")

    async def failing(request, match):
        raise error

    router.get("fail", "/fail", failing)
    http_handler = make_handler(router)

    # ACT
    await http_handler.handle(make_scope("GET", "/fail"), FakeReceive(), "send")

    # ASSERT
    assert http_handler.exception_handler.calls == [error]
    assert http_handler.default_request_handler.calls == []


@pytest.mark.asyncio
async def test__http_handler_handle__when_conversion_fails__calls_exception_handler():
    # ARRANGE
    router = Router()
    router.get("show", "/products/{id}", lambda request, match: "ok", int)
    http_handler = make_handler(router)

    # ACT
    await http_handler.handle(
        make_scope("GET", "/products/99999999999"), FakeReceive(), "send"
    )

    # ASSERT
    assert len(http_handler.exception_handler.calls) == 1
