"""Tests for response decoding."""

import json

import pytest

from coinbase_trade.api.error import (
    ApiError,
    BadRequestError,
    DecodeError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from coinbase_trade.api.response import MISSING_CREDENTIALS_HINT, PageInfo, decode_response


def _body(data) -> bytes:
    return json.dumps(data).encode()


class TestErrorResponses:
    def test_message_is_server_text(self):
        with pytest.raises(BadRequestError) as exc_info:
            decode_response(_body({"message": "bad request"}), 400)

        assert exc_info.value.message == "bad request"
        assert exc_info.value.status == 400

    def test_unparseable_body_includes_status_and_text(self):
        with pytest.raises(ApiError) as exc_info:
            decode_response(b"<html>gateway</html>", 400)

        assert "400" in exc_info.value.message
        assert "<html>gateway</html>" in exc_info.value.message

    def test_error_details_envelope(self):
        body = _body({"error": "NOT_FOUND", "error_details": "order not found", "message": "order not found"})

        with pytest.raises(NotFoundError) as exc_info:
            decode_response(body, 404)

        assert exc_info.value.message == "order not found"

    def test_error_without_message_uses_details(self):
        body = _body({"error": "INVALID_ARGUMENT", "error_details": "limit too large"})

        with pytest.raises(BadRequestError) as exc_info:
            decode_response(body, 400)

        assert exc_info.value.message == "limit too large"

    def test_missing_credentials_hint(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            decode_response(_body({"message": "Unauthorized"}), 401, credentials_missing=True)

        assert exc_info.value.message == "Unauthorized" + MISSING_CREDENTIALS_HINT

    @pytest.mark.parametrize(
        "status, error_type",
        [
            (400, BadRequestError),
            (401, UnauthorizedError),
            (404, NotFoundError),
            (429, RateLimitedError),
            (500, ServerError),
            (503, ServerError),
            (302, UnexpectedStatusError),
            (201, UnexpectedStatusError),
        ],
    )
    def test_status_mapping(self, status, error_type):
        with pytest.raises(error_type):
            decode_response(_body({"message": "x"}), status)

    def test_error_raised_even_without_parsers(self):
        with pytest.raises(ServerError):
            decode_response(b"", 500)


class TestSuccessResponses:
    def test_result_and_page_read_same_body(self):
        body = _body({"items": [1, 2], "has_next": True, "cursor": "abc"})

        result, page = decode_response(
            body, 200, parse=lambda d: d["items"], parse_page=PageInfo.from_dict
        )

        assert result == [1, 2]
        assert page == PageInfo(has_next=True, cursor="abc")

    def test_no_parsers_returns_nothing(self):
        assert decode_response(b"not json", 200) == (None, None)

    def test_malformed_json_is_decode_error(self):
        with pytest.raises(DecodeError):
            decode_response(b"{not json", 200, parse=lambda d: d)

    def test_non_object_is_decode_error(self):
        with pytest.raises(DecodeError):
            decode_response(b"[1, 2]", 200, parse=lambda d: d)

    def test_missing_key_is_decode_error(self):
        with pytest.raises(DecodeError):
            decode_response(_body({}), 200, parse=lambda d: d["account"])


class TestPageInfo:
    def test_defaults(self):
        assert PageInfo.from_dict({}) == PageInfo(has_next=False, cursor="", total_count=None)

    def test_count_field(self):
        page = PageInfo.from_dict({"num_products": 120}, "num_products")

        assert page.total_count == 120

    def test_count_ignored_without_field_name(self):
        assert PageInfo.from_dict({"num_products": 120}).total_count is None

    def test_bad_count_is_decode_error(self):
        with pytest.raises(DecodeError):
            PageInfo.from_dict({"num_products": "many"}, "num_products")
