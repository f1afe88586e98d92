"""
Local HTTP server used by the integration tests
"""

import json
import socket
import threading
from collections.abc import Generator
from email.parser import BytesParser
from email.policy import default as default_policy
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlparse

import pytest


class MockHandler(BaseHTTPRequestHandler):
    """Routes mirroring the endpoints the client is exercised against"""

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Suppress log messages during tests."""

    def do_GET(self) -> None:  # noqa: N802
        self._handle()

    def do_POST(self) -> None:  # noqa: N802
        self._handle()

    def do_PUT(self) -> None:  # noqa: N802
        self._handle()

    def do_PATCH(self) -> None:  # noqa: N802
        self._handle()

    def do_DELETE(self) -> None:  # noqa: N802
        self._handle()

    def _send(
        self,
        status: int,
        payload: Any = None,
        reason: Optional[str] = None,
        content_type: str = "application/json",
    ) -> None:
        if payload is None:
            body = b""
        elif isinstance(payload, str):
            body = payload.encode("utf-8")
        else:
            body = json.dumps(payload).encode("utf-8")

        self.send_response(status, reason)
        if body:
            self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _read_raw(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length else b""

    def _read_body(self) -> Any:
        raw = self._read_raw()
        if "json" in (self.headers.get("Content-Type") or ""):
            return json.loads(raw or b"null")
        return raw.decode("utf-8")

    def _lower_headers(self) -> Dict[str, str]:
        return {key.lower(): value for key, value in self.headers.items()}

    def _read_form(self) -> Dict[str, str]:
        content_type = self.headers.get("Content-Type") or ""
        raw = self._read_raw()
        message = BytesParser(policy=default_policy).parsebytes(
            b"Content-Type: " + content_type.encode("latin-1") + b"\r\n\r\n" + raw
        )
        fields = {}
        for part in message.iter_parts():
            name = part.get_param("name", header="content-disposition")
            fields[name] = part.get_payload(decode=True).decode("utf-8").strip()
        return fields

    def _body_route(self, expected_method: str) -> None:
        body = self._read_body()
        if self.command != expected_method:
            self._send(405, {"ok": False})
            return
        self._send(200, {"body": body})

    def _handle(self) -> None:
        url = urlparse(self.path)
        path = url.path

        if path == "/not-found":
            self._send(404, {"message": "Not found"}, reason="handler not found")
        elif path == "/plain-text":
            self._send(200, "textplain", content_type="text/plain")
        elif path == "/content-type":
            self._send(200, {
                "requestContentType": self.headers.get("Content-Type"),
                "responseContentType": "application/json",
                "ok": True,
            })
        elif path == "/204":
            self._send(204, reason="handler no content")
        elif path == "/failed-request-with-text-answer":
            self._send(404, "Not found", reason="handler not found", content_type="text/plain")
        elif path == "/delete":
            self._send(200, {"message": "Deleted"})
        elif path == "/auth":
            query = parse_qs(url.query)
            token_key = query.get("token", ["authorization"])[0]
            self._send(200, {
                "token": self._lower_headers().get(token_key),
                "tokenKey": token_key,
            })
        elif path == "/post-with-body":
            self._body_route("POST")
        elif path == "/put-with-body":
            self._body_route("PUT")
        elif path == "/patch-with-body":
            self._body_route("PATCH")
        elif path == "/delete-with-body":
            self._body_route("DELETE")
        elif path == "/headers":
            self._send(200, {"headers": self._lower_headers()})
        elif path == "/form-data":
            form = self._read_form()
            self._send(200, {
                "contentType": self.headers.get("Content-Type"),
                "key": form.get("key"),
                "type": form.get("type"),
            })
        else:
            self._send(200, {"ok": True})


@pytest.fixture(scope="module")
def base_path() -> Generator[str, None, None]:
    """Base URL of a server running for the whole module"""
    server = ThreadingHTTPServer(("127.0.0.1", 0), MockHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[0], server.server_address[1]
    try:
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def unused_url() -> str:
    """URL nothing listens on"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"
