from urlmapping.http_handler.request_handlers.default_request_handler import (
    determine_content_type_header,
)
from urlmapping.http_handler.request_handlers.response_sender import ResponseSender
from urlmapping.http_handler.response import HTTPResponse


class HeadRequestHandler:
    def __init__(self, response_sender: ResponseSender):
        self.response_sender = response_sender

    async def handle(
        self, send, route_func_result: str | bytes | dict | list | HTTPResponse
    ):
        status_code = 200
        headers = None
        if isinstance(route_func_result, HTTPResponse):
            status_code = route_func_result.status_code
            headers = list(route_func_result.headers)
            route_func_result = route_func_result.response_body

        if route_func_result is None:
            route_func_result = b""

        body = self.response_sender.serialize_body(route_func_result)
        if headers is None:
            headers = [
                (b"content-type", determine_content_type_header(route_func_result))
            ]

        if not any(key.lower() == b"content-length" for key, _ in headers):
            headers = headers + [(b"content-length", str(len(body)).encode("utf-8"))]

        await self.response_sender.send_response(
            send, status_code=status_code, headers=headers, response_body=b""
        )
