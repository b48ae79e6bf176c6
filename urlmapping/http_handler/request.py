from typing import Coroutine, Dict, List
from urllib.parse import parse_qs

import orjson

from urlmapping.routing.route import MatchResult


class HTTPRequest:
    """A request that has already been routed.

    Path variables come from the match and are typed; query parameters keep
    every value given for a key. Header names are lower-cased.
    """

    def __init__(
        self,
        method: str,
        path: str,
        match: MatchResult,
        query_params: Dict[str, List[str]],
        headers: Dict[str, str],
        body: bytes,
    ):
        self.method = method
        self.path = path
        self.match = match
        self.query_params = query_params
        self.headers = headers
        self.body = body

    @property
    def route_name(self) -> str:
        return self.match.name

    @property
    def path_variables(self):
        return self.match.variables

    def path_variable(self, name: str, default=None):
        return self.match.variable(name, default)

    def query_param(self, name: str, default=None):
        values = self.query_params.get(name)
        if not values:
            return default
        return values[0]

    def header(self, name: str, default=None):
        return self.headers.get(name.lower(), default)

    @property
    def body_as_dict(self):
        return orjson.loads(self.body)

    @property
    def body_as_str(self):
        return self.body.decode("utf-8")

    def to_dict(self):
        return {
            "method": self.method,
            "path": self.path,
            "route_name": self.route_name,
            "path_variables": dict(self.path_variables),
            "query_params": self.query_params,
            "headers": self.headers,
            "body": self.body,
        }


class HTTPRequestConstructor:
    async def construct(
        self, scope, receive: Coroutine, path: str, match: MatchResult
    ) -> HTTPRequest:
        return HTTPRequest(
            method=scope["method"].upper(),
            path=path,
            match=match,
            query_params=self._format_query_params(scope.get("query_string", b"")),
            headers=self._format_headers(scope.get("headers", [])),
            body=await self._read_body(receive),
        )

    def _format_query_params(self, query_string: bytes) -> Dict[str, List[str]]:
        return parse_qs(query_string.decode("latin-1"), keep_blank_values=True)

    def _format_headers(self, headers) -> Dict[str, str]:
        # repeated headers are folded into one comma separated value
        formatted_headers = {}
        for key, value in headers:
            name = key.decode("latin-1").lower()
            value = value.decode("latin-1")
            if name in formatted_headers:
                value = f"{formatted_headers[name]}, {value}"
            formatted_headers[name] = value
        return formatted_headers

    async def _read_body(self, receive):
        chunks = []
        more_body = True
        while more_body:
            message = await receive()
            chunks.append(message.get("body", b""))
            more_body = message.get("more_body", False)
        return b"".join(chunks)
