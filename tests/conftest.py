"""
Shared fixtures
"""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import pytest
import requests

from f9.models.envelope import RequestOptions


def build_response(
    status: int = 200,
    json_body: Any = None,
    text: Optional[str] = None,
    reason: str = "OK",
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """Build a requests.Response without touching the network"""
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response.encoding = "utf-8"
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (text or "").encode("utf-8")
    response.headers.update(headers or {})
    return response


class FakeTransport:
    """Transport returning queued responses and recording every request"""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, RequestOptions]] = []
        self._queue: List[Union[requests.Response, Exception]] = []
        self.default: Callable[[str, RequestOptions], requests.Response] = (
            lambda url, options: build_response(json_body={"ok": True})
        )

    def queue(self, *results: Union[requests.Response, Exception]) -> "FakeTransport":
        self._queue.extend(results)
        return self

    def __call__(self, url: str, options: RequestOptions) -> requests.Response:
        self.calls.append((url, options))
        if self._queue:
            result = self._queue.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return self.default(url, options)

    @property
    def last(self) -> Tuple[str, RequestOptions]:
        return self.calls[-1]


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    return build_response


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()
