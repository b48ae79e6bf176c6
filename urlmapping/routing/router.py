from enum import Enum
from typing import Callable, Optional

from urlmapping.errors import UnsupportedMethod
from urlmapping.routing.route import MatchResult
from urlmapping.routing.route_table import RouteTable
from urlmapping.routing.variable_types import VariableType


class HTTPMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

    @classmethod
    def parse(cls, method) -> "HTTPMethod":
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).upper())
        except ValueError:
            raise UnsupportedMethod(method) from None


class Router:
    def __init__(
        self,
        use_trailing_slash_match: bool = True,
        default_type: VariableType = VariableType.STRING,
    ):
        self.use_trailing_slash_match = use_trailing_slash_match
        self.tables = {
            method: RouteTable(use_trailing_slash_match, default_type)
            for method in HTTPMethod
        }

    def table(self, method) -> RouteTable:
        return self.tables[HTTPMethod.parse(method)]

    def routes(self):
        for method, table in self.tables.items():
            for route in table:
                yield method, route

    def register(
        self,
        method,
        name: Optional[str],
        pattern: str,
        handler: Optional[Callable] = None,
        *types,
    ) -> "Router":
        self.table(method).register(name, pattern, handler, *types)
        return self

    def get(self, name, pattern, handler=None, *types) -> "Router":
        return self.register(HTTPMethod.GET, name, pattern, handler, *types)

    def post(self, name, pattern, handler=None, *types) -> "Router":
        return self.register(HTTPMethod.POST, name, pattern, handler, *types)

    def put(self, name, pattern, handler=None, *types) -> "Router":
        return self.register(HTTPMethod.PUT, name, pattern, handler, *types)

    def delete(self, name, pattern, handler=None, *types) -> "Router":
        return self.register(HTTPMethod.DELETE, name, pattern, handler, *types)

    def head(self, name, pattern, handler=None, *types) -> "Router":
        return self.register(HTTPMethod.HEAD, name, pattern, handler, *types)

    def options(self, name, pattern, handler=None, *types) -> "Router":
        return self.register(HTTPMethod.OPTIONS, name, pattern, handler, *types)

    def trace(self, name, pattern, handler=None, *types) -> "Router":
        return self.register(HTTPMethod.TRACE, name, pattern, handler, *types)

    def route(self, method, pattern: str, *types, name: str = ""):
        def decorator(func: Callable):
            self.register(method, name, pattern, func, *types)
            return func

        return decorator

    def match(self, method, path: Optional[str]) -> MatchResult:
        return self.table(method).match(path)

    def dispatch(self, method, path: Optional[str], *handler_args) -> MatchResult:
        return self.table(method).dispatch(path, *handler_args)
