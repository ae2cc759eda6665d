from datetime import datetime, timezone

import pytest

from uniswap_api import domain_errors
from uniswap_api.api_errors import (
    BAD_REQUEST,
    INTERNAL_ERROR,
    VALIDATION_ERROR,
    ApiError,
    handle_error,
)


def test_str_shows_status_and_code():
    assert str(BAD_REQUEST.with_message("x")) == "400: bad request"
    assert str(INTERNAL_ERROR.with_message("x")) == "500: internal server error"


@pytest.mark.parametrize(
    "err, status, code_text",
    [
        (INTERNAL_ERROR, 500, "internal server error"),
        (VALIDATION_ERROR, 400, "validation error"),
        (BAD_REQUEST, 400, "bad request"),
    ],
)
def test_predefined_errors(err, status, code_text):
    body = err.to_dict()
    assert (body["status"], body["code"]) == (status, code_text)


def test_with_message_returns_copy():
    err = VALIDATION_ERROR.with_message("pool required field")
    assert err.message == "pool required field"
    assert VALIDATION_ERROR.message is None
    assert err.status == 400
    assert err.code == "validation error"


def test_matches_compares_status_and_code():
    assert VALIDATION_ERROR.matches(VALIDATION_ERROR.with_message("anything"))
    assert not VALIDATION_ERROR.matches(BAD_REQUEST)
    assert not BAD_REQUEST.matches(INTERNAL_ERROR)
    assert not BAD_REQUEST.matches(ValueError("bad request"))


def test_to_dict_omits_unset_message():
    body = BAD_REQUEST.to_dict()
    assert "message" not in body
    assert body["status"] == 400
    assert body["code"] == "bad request"


def test_to_dict_keeps_field_order_and_message():
    body = BAD_REQUEST.with_message("m").to_dict()
    assert list(body) == ["status", "code", "message", "path", "timestamp"]
    assert body["message"] == "m"


def test_to_dict_formats_utc_timestamp():
    moment = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
    err = ApiError(status=400, code="bad request", timestamp=moment)
    assert err.to_dict()["timestamp"] == "2024-05-06T07:08:09Z"


def test_handle_error_keeps_api_error_and_sets_path():
    before = datetime.now(timezone.utc)
    result = handle_error(VALIDATION_ERROR.with_message("src required field"), "/estimate")
    after = datetime.now(timezone.utc)
    assert result.path == "/estimate"
    assert result.message == "src required field"
    assert VALIDATION_ERROR.matches(result)
    assert before <= result.timestamp <= after
    assert result.to_dict()["timestamp"].endswith("Z")


def test_handle_error_maps_bad_request_domain_error():
    err = domain_errors.BAD_REQUEST.with_message("x")
    result = handle_error(err, "/p")
    assert BAD_REQUEST.matches(result)
    assert result.message == str(err)


@pytest.mark.parametrize(
    "err",
    [domain_errors.NOT_FOUND, domain_errors.INTERNAL, ValueError("boom"), KeyError("k")],
)
def test_handle_error_falls_back_to_internal(err):
    result = handle_error(err, "/p")
    assert INTERNAL_ERROR.matches(result)
    assert result.message is None


def test_handle_error_finds_api_error_inside_chain():
    wrapped = domain_errors.INTERNAL.wrap(VALIDATION_ERROR.with_message("inner"))
    result = handle_error(wrapped, "/p")
    assert VALIDATION_ERROR.matches(result)
    assert result.message == "inner"


def test_handle_error_follows_raise_from():
    try:
        try:
            raise domain_errors.BAD_REQUEST.with_message("cause")
        except domain_errors.DomainError as inner:
            raise RuntimeError("outer") from inner
    except RuntimeError as outer:
        result = handle_error(outer, "/p")
    assert BAD_REQUEST.matches(result)
    assert result.message == str(domain_errors.BAD_REQUEST.with_message("cause"))