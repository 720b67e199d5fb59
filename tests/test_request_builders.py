import pytest

from trailapi.config import DEFAULT_CLIENT_VERSION
from trailapi.request import (
    Request,
    RequestBuilder,
    build_delete,
    build_get,
    build_json_post,
    build_post,
    strip_nulls,
)


def test_strip_nulls_drops_none_and_keeps_order():
    pairs = [("z", "1"), ("skip", None), ("a", "2"), ("m", None), ("b", "3")]
    assert strip_nulls(pairs) == [("z", "1"), ("a", "2"), ("b", "3")]


def test_strip_nulls_keeps_falsy_values():
    # Only absent values are dropped; empty strings and zero are real values
    assert strip_nulls([("a", ""), ("b", 0), ("c", None)]) == [("a", ""), ("b", 0)]


def test_build_get_encodes_query_and_attaches_client_header():
    req = build_get("http://api.example.com/trails", ("q", "blue ridge"), ("page", None), ("limit", 5))
    assert req.method == "GET"
    assert req.url == "http://api.example.com/trails?q=blue+ridge&limit=5"
    assert req.header("User-Agent") == DEFAULT_CLIENT_VERSION
    assert req.content == b""


def test_build_get_without_params_keeps_trailing_separator():
    req = build_get("http://api.example.com/trails", ("only", None))
    assert req.url == "http://api.example.com/trails?"


def test_build_delete_matches_get_encoding():
    req = build_delete("https://api.example.com/trails/7", ("token", "abc"), ("reason", None))
    assert req.method == "DELETE"
    assert req.url == "https://api.example.com/trails/7?token=abc"
    assert req.header("user-agent") == DEFAULT_CLIENT_VERSION


def test_build_post_puts_params_in_form_body():
    req = build_post("http://api.example.com/login", ("user", "ann@example.com"), ("otp", None), ("pass", "p&w"))
    assert req.method == "POST"
    assert req.url == "http://api.example.com/login"
    assert req.content == b"user=ann%40example.com&pass=p%26w"
    assert req.header("Content-Type") == "application/x-www-form-urlencoded; charset=UTF-8"
    assert req.header("User-Agent") == DEFAULT_CLIENT_VERSION


def test_build_json_post_sends_raw_body_with_json_headers():
    data = '{"name": "Trail é", "ok": true}'
    req = build_json_post("http://api.example.com/reports", data, client_version="smarttrail/2.1")
    assert req.method == "POST"
    assert req.content == data.encode("utf-8")
    assert req.header("Accept") == "application/json"
    assert req.header("Content-Type") == "application/json"
    assert req.header("User-Agent") == "smarttrail/2.1"


def test_build_json_post_unencodable_body_aborts():
    with pytest.raises(ValueError, match="Unable to encode http parameters."):
        build_json_post("http://api.example.com/reports", '{"name": "é"}', charset="ascii")


def test_unknown_charset_aborts_construction():
    with pytest.raises(ValueError):
        build_json_post("http://api.example.com/reports", "{}", charset="no-such-charset")
    with pytest.raises(ValueError):
        build_post("http://api.example.com/login", ("user", "ann"), charset="no-such-charset")


def test_unknown_charset_aborts_even_without_params():
    # Nothing to encode still must not yield a request with a bogus charset
    for build in (build_get, build_post, build_delete):
        with pytest.raises(ValueError, match="Unable to encode http parameters."):
            build("http://api.example.com/trails", charset="no-such-charset")
        with pytest.raises(ValueError):
            build("http://api.example.com/trails", ("page", None), charset="no-such-charset")


def test_building_twice_yields_equal_requests():
    b = RequestBuilder("smarttrail/2.1")
    params = (("lat", "35.1"), ("skip", None), ("lng", "-82.4"))
    assert b.get("http://h/x", *params) == b.get("http://h/x", *params)
    assert b.post("http://h/x", *params) == b.post("http://h/x", *params)
    assert b.delete("http://h/x", *params) == b.delete("http://h/x", *params)
    assert b.json_post("http://h/x", "{}") == b.json_post("http://h/x", "{}")


def test_request_is_immutable():
    req = build_get("http://h/x")
    with pytest.raises(AttributeError):
        req.url = "http://other"  # type: ignore[misc]


def test_request_builder_defaults_client_version():
    assert RequestBuilder().client_version == DEFAULT_CLIENT_VERSION
    assert RequestBuilder(None).get("http://h/x").header("User-Agent") == DEFAULT_CLIENT_VERSION


def test_request_to_httpx_carries_method_url_headers_body():
    req = Request("POST", "http://h/x", headers=(("User-Agent", "ua"), ("Accept", "application/json")), content=b"{}")
    hx = req.to_httpx()
    assert hx.method == "POST"
    assert str(hx.url) == "http://h/x"
    assert hx.headers["User-Agent"] == "ua"
    assert hx.headers["Accept"] == "application/json"
    assert hx.content == b"{}"
