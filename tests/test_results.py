from deskpro_integration.results import UNDECODABLE, ApiResult, RawResponse


def test_status_line_sets_code() -> None:
    result = ApiResult.parse("HTTP/1.1 404 Not Found\r\nContent-Type: application/json", "{}")
    assert result.status_code == 404


def test_unparseable_status_line_defaults_to_200() -> None:
    assert ApiResult.parse("HTTP/2 500", "").status_code == 200
    assert ApiResult.parse("garbage", "").status_code == 200
    assert ApiResult.parse("", "").status_code == 200


def test_headers_lowercased_trimmed_and_duplicates_kept() -> None:
    block = "\r\n".join(
        [
            "HTTP/1.0 200 OK",
            "Set-Cookie:  a=1 ",
            "X-Thing: Value: With Colon",
            "no colon here",
            "SET-COOKIE: b=2",
        ]
    )
    result = ApiResult.parse(block, "")

    assert result.get_headers() == [
        ("set-cookie", "a=1"),
        ("x-thing", "Value: With Colon"),
        ("set-cookie", "b=2"),
    ]
    assert result.get_headers("Set-Cookie") == ["a=1", "b=2"]
    assert result.get_headers("missing") == []


def test_json_is_lazy_and_memoized() -> None:
    result = ApiResult.parse("HTTP/1.1 200 OK", '{"tickets": []}')
    first = result.json
    assert first == {"tickets": []}
    assert result.json is first


def test_undecodable_body_is_falsy_not_an_exception() -> None:
    result = ApiResult.parse("HTTP/1.1 200 OK", "<html>proxy page</html>")
    assert result.json is UNDECODABLE
    assert not result.json

    assert ApiResult.parse("HTTP/1.1 200 OK", "null").json is UNDECODABLE
    assert ApiResult.parse("HTTP/1.1 200 OK", "").json is UNDECODABLE


def test_set_body_invalidates_decoded_json() -> None:
    result = ApiResult.parse("HTTP/1.1 200 OK", "not json")
    assert result.json is UNDECODABLE

    result.set_body('{"success": true}')
    assert result.body == '{"success": true}'
    assert result.json == {"success": True}


def test_split_raw_response() -> None:
    assert RawResponse.split("HTTP/1.1 200 OK\r\nA: b\r\n\r\n{}") == ("HTTP/1.1 200 OK\r\nA: b", "{}")
    assert RawResponse.split("HTTP/1.1 204 No Content") == ("HTTP/1.1 204 No Content", "")
