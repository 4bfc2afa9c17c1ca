import io
from unittest.mock import MagicMock

from swagger_client.parser.base import RequestOptions
from swagger_client.transport import DEFAULT_TIMEOUT, RequestsTransport

URL = "https://api.example.com/items"


def _send(options: RequestOptions, **kwargs):
    session = MagicMock()
    transport = RequestsTransport(session=session, **kwargs)
    result = transport.fetch(URL, options)
    assert result is session.request.return_value
    args, call_kwargs = session.request.call_args
    assert args == (options.method, URL)
    return call_kwargs


class TestRequestsTransport:
    def test_get_without_body(self):
        kwargs = _send(RequestOptions(method="GET", headers={}, body={}))
        assert kwargs == {"headers": {}, "timeout": DEFAULT_TIMEOUT}

    def test_json_body(self):
        options = RequestOptions(method="POST", headers={"content-type": "application/json"}, body={"name": "Rex"})
        kwargs = _send(options)
        assert kwargs["json"] == {"name": "Rex"}
        assert kwargs["headers"] == {"content-type": "application/json"}

    def test_urlencoded_form_body(self):
        options = RequestOptions(
            method="POST",
            headers={"content-type": "application/x-www-form-urlencoded"},
            body={"name": "Rex"},
        )
        kwargs = _send(options)
        assert kwargs["data"] == {"name": "Rex"}
        assert "content-type" not in kwargs["headers"]

    def test_multipart_form_body(self):
        options = RequestOptions(method="POST", headers={"content-type": "multipart/form-data"}, body={"caption": 1})
        kwargs = _send(options)
        assert kwargs["files"] == {"caption": (None, "1")}
        assert kwargs["headers"] == {}

    def test_opaque_body_sent_raw(self):
        kwargs = _send(RequestOptions(method="PUT", headers={}, body="<pet/>"))
        assert kwargs["data"] == "<pet/>"

    def test_list_headers_joined(self):
        options = RequestOptions(method="GET", headers={"accept": ["application/json", "application/xml"]}, body={})
        kwargs = _send(options)
        assert kwargs["headers"] == {"accept": "application/json, application/xml"}

    def test_custom_timeout(self):
        kwargs = _send(RequestOptions(method="GET"), timeout=5)
        assert kwargs["timeout"] == 5

    def test_options_not_mutated(self):
        options = RequestOptions(method="POST", headers={"content-type": "multipart/form-data"}, body={"a": "b"})
        _send(options)
        assert options.headers == {"content-type": "multipart/form-data"}

    def test_multipart_binary_passed_through(self):
        options = RequestOptions(
            method="POST",
            headers={"content-type": "multipart/form-data"},
            body={"file": b"\x89PNG", "chunk": bytearray(b"\x00\x01"), "caption": "cute"},
        )
        files = _send(options)["files"]
        assert files["file"] == (None, b"\x89PNG")
        assert files["chunk"] == (None, bytearray(b"\x00\x01"))
        assert files["caption"] == (None, "cute")

    def test_multipart_file_object_passed_through(self):
        upload = io.BytesIO(b"\x89PNG")
        options = RequestOptions(method="POST", headers={"content-type": "multipart/form-data"}, body={"file": upload})
        assert _send(options)["files"]["file"][1] is upload
