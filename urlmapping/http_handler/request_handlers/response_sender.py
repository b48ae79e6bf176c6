from abc import ABC, abstractmethod
from typing import Coroutine, List, Tuple, Union


class JSONSerializer(ABC):
    @abstractmethod
    def dumps(self, obj) -> bytes:
        """Serialize an object to a json byte string."""


class ResponseSender:
    def __init__(self, json_serializer: JSONSerializer):
        self.json_serializer = json_serializer

    def serialize_body(self, response_body: Union[bytes, str, dict, list]) -> bytes:
        if isinstance(response_body, (dict, list)):
            return self.json_serializer.dumps(response_body)
        if isinstance(response_body, str):
            return response_body.encode("utf-8")
        return response_body

    async def send_response_start(
        self, send: Coroutine, headers: List[Tuple[bytes, bytes]], status_code: int
    ):
        await send(
            {"type": "http.response.start", "status": status_code, "headers": headers}
        )

    async def send_response_body(
        self,
        send: Coroutine,
        response_body: Union[bytes, str, dict, list],
    ):
        await send(
            {
                "type": "http.response.body",
                "body": self.serialize_body(response_body),
            }
        )

    async def send_response(self, send, headers, response_body, status_code):
        await self.send_response_start(send, headers, status_code)
        await self.send_response_body(send, response_body)

    async def send_detail(self, send, status_code: int, detail: str, headers=None):
        await self.send_response(
            send,
            status_code=status_code,
            headers=[(b"content-type", b"application/json")] + list(headers or []),
            response_body={"detail": detail},
        )
