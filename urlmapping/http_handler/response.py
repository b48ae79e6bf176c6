from typing import List, Tuple, Union


class HTTPResponse:
    def __init__(
        self,
        status_code: int,
        headers: List[Tuple[bytes, bytes]],
        response_body: Union[bytes, str, dict, list],
    ):
        self.status_code = status_code
        self.headers = headers
        self.response_body = response_body

    def to_dict(self):
        return {
            "status_code": self.status_code,
            "headers": self.headers,
            "response_body": self.response_body,
        }
