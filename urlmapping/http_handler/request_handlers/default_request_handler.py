from urlmapping.http_handler.request_handlers.response_sender import ResponseSender
from urlmapping.http_handler.response import HTTPResponse

RESPONSE_TYPES = {
    str: b"text/plain",
    bytes: b"application/octet-stream",
    dict: b"application/json",
    list: b"application/json",
}


def determine_content_type_header(result) -> bytes:
    return RESPONSE_TYPES.get(type(result), b"application/octet-stream")


class DefaultRequestHandler:
    def __init__(
        self,
        response_sender: ResponseSender,
    ):
        self.response_sender = response_sender

    async def handle(
        self, send, route_func_result: str | bytes | dict | list | HTTPResponse
    ):
        if isinstance(route_func_result, HTTPResponse):
            return await self.response_sender.send_response(
                send,
                status_code=route_func_result.status_code,
                headers=route_func_result.headers,
                response_body=route_func_result.response_body,
            )

        if route_func_result is None:
            route_func_result = b""

        content_type_header = determine_content_type_header(route_func_result)
        return await self.response_sender.send_response(
            send,
            status_code=200,
            headers=[
                (b"content-type", content_type_header),
            ],
            response_body=route_func_result,
        )
