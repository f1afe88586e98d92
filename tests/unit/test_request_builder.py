"""
Request Builder Unit Tests
"""

import json

import pytest

from f9.client.request_builder import (
    build_full_path,
    build_request,
    build_request_name,
    get_header,
    infer_request_type,
    merge_headers,
    parse_call_params,
)
from f9.exceptions import ValidationError
from f9.models import Credentials, FormData, HttpMethod, RequestMode, ResponseType


DEFAULTS = {"Content-Type": "application/json"}


class TestPathResolution:
    """Tests for build_full_path"""

    def test_absolute_url_ignores_base(self):
        assert build_full_path("http://api", "https://other/x") == "https://other/x"

    def test_leading_slash(self):
        assert build_full_path("http://api", "/users") == "http://api/users"

    def test_relative_path(self):
        assert build_full_path("http://api", "users") == "http://api/users"

    def test_empty_base(self):
        assert build_full_path("", "/users") == "/users"


class TestHeaders:
    """Tests for header merging and lookup"""

    def test_merge_is_right_biased(self):
        merged = merge_headers({"a": "1", "b": "2"}, {"b": "3", "c": "4"})
        assert merged == {"a": "1", "b": "3", "c": "4"}

    def test_merge_keeps_case(self):
        merged = merge_headers({"X-Token": "1"}, {"x-token": "2"})
        assert merged == {"X-Token": "1", "x-token": "2"}

    def test_lookup_is_case_insensitive(self):
        assert get_header({"content-type": "text/plain"}, "Content-Type") == "text/plain"
        assert get_header({}, "Content-Type") is None


class TestRequestTypeInference:
    """Tests for infer_request_type"""

    @pytest.mark.parametrize("content_type,expected", [
        ("text/plain", ResponseType.TEXT),
        ("application/x-www-form-urlencoded", ResponseType.FORM_DATA),
        ("multipart/form-data", ResponseType.FORM_DATA),
        ("application/json", ResponseType.JSON),
        ("application/octet-stream", ResponseType.ARRAY_BUFFER),
        (None, ResponseType.ARRAY_BUFFER),
    ])
    def test_inference(self, content_type, expected):
        assert infer_request_type(content_type) == expected


class TestBuildRequest:
    """Tests for build_request"""

    def test_fields_become_json_body(self):
        """Non-routing params form the body and are JSON encoded"""
        call = parse_call_params("post", "/items", {
            "name": "item",
            "tags": [1, 2],
            "headers": {"X-Trace": "1"},
            "options": {"mode": "cors"},
        })
        request = build_request(call, "http://api", DEFAULTS)

        assert request.url == "http://api/items"
        assert json.loads(request.options.body) == {"name": "item", "tags": [1, 2]}
        assert request.options.headers == {"Content-Type": "application/json", "X-Trace": "1"}
        assert request.options.mode == RequestMode.CORS

    def test_explicit_body_wins(self):
        """An explicit body field is used instead of the other params"""
        call = parse_call_params("put", "/items/1", {"body": {"a": 1}, "ignored": True})
        request = build_request(call, "http://api", DEFAULTS)
        assert json.loads(request.options.body) == {"a": 1}

    def test_get_has_no_body(self):
        call = parse_call_params("get", "/items", {"q": "x"})
        request = build_request(call, "http://api", DEFAULTS)
        assert request.options.body is None

    def test_delete_carries_body(self):
        call = parse_call_params("delete", "/items/1", {"reason": "dup"})
        request = build_request(call, "http://api", DEFAULTS)
        assert json.loads(request.options.body) == {"reason": "dup"}

    def test_non_json_body_passes_through(self):
        """Text content type leaves the body untouched"""
        call = parse_call_params("post", "/notes", {
            "body": "plain words",
            "headers": {"content-type": "text/plain"},
        })
        request = build_request(call, "http://api", DEFAULTS)
        assert request.options.body == "plain words"

    def test_bytes_body_passes_through(self):
        """Bytes are sent as given even with the JSON default content type"""
        call = parse_call_params("post", "/upload", {"body": b"\x00\x01"})
        request = build_request(call, "http://api", DEFAULTS)
        assert request.options.body == b"\x00\x01"

    def test_unencodable_json_body_raises(self):
        """A body json.dumps cannot handle is a caller error"""
        call = parse_call_params("post", "/items", {"body": {"when": object()}})
        with pytest.raises(TypeError):
            build_request(call, "http://api", DEFAULTS)

    def test_replay_keeps_recorded_headers(self):
        """Replayed calls ignore the current defaults"""
        call = parse_call_params("get", "http://api/items", {"headers": {"X-Trace": "1"}})
        call.replay = True
        request = build_request(call, "http://api", {**DEFAULTS, "X-Later": "1"})
        assert request.options.headers == {"X-Trace": "1"}

    def test_form_data_drops_content_type(self):
        """Multipart bodies pass through without any Content-Type casing"""
        form = FormData({"key": "value"})
        call = parse_call_params("post", "/form-data", {
            "body": form,
            "headers": {"content-type": "application/json"},
        })
        request = build_request(call, "http://api", DEFAULTS)
        assert request.options.body is form
        assert get_header(request.options.headers, "Content-Type") is None

    def test_response_type_default_and_override(self):
        call = parse_call_params("get", "/a")
        assert build_request(call, "", DEFAULTS).response_type == ResponseType.JSON

        call = parse_call_params("get", "/a", {"options": {"response_type": "text"}})
        assert build_request(call, "", DEFAULTS).response_type == ResponseType.TEXT

        call = parse_call_params("get", "/a")
        request = build_request(call, "", DEFAULTS, default_response_type=ResponseType.BLOB)
        assert request.response_type == ResponseType.BLOB

    def test_credentials_precedence(self):
        """Per call beats client default beats unset"""
        call = parse_call_params("get", "/a", {"credentials": "omit"})
        assert build_request(call, credentials=Credentials.INCLUDE).options.credentials == Credentials.OMIT

        call = parse_call_params("get", "/a")
        assert build_request(call, credentials=Credentials.INCLUDE).options.credentials == Credentials.INCLUDE

        assert build_request(call).options.credentials is None

    def test_request_name_strips_scheme(self):
        assert build_request_name(HttpMethod.GET, "https://api/x") == "get:api/x"
        assert build_request_name(HttpMethod.POST, "HTTP://api/x") == "post:api/x"

    def test_invalid_method(self):
        with pytest.raises(ValidationError):
            parse_call_params("fetch", "/a")

    def test_invalid_response_type(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_call_params("get", "/a", {"options": {"response_type": "xml"}})
        assert exc_info.value.field == "response_type"
