"""Error Hierarchy — verifies status codes, codes and response envelope."""

from dogproxy.core.errors import (
    DatabaseError, DogProxyError, EmailConflictError, ErrorCategory,
    ImageCountError, ResourceNotFoundError, UpstreamError,
)


def test_every_error_is_a_dogproxy_error():
    for exc in (
        ImageCountError(51, 50),
        ResourceNotFoundError("User", "1"),
        EmailConflictError("a@b.io"),
        DatabaseError("boom", "commit"),
        UpstreamError("timeout", "timeout"),
    ):
        assert isinstance(exc, DogProxyError)


def test_http_status_mapping():
    assert ImageCountError(51, 50).http_status == 400
    assert ResourceNotFoundError("User", "1").http_status == 404
    assert EmailConflictError("a@b.io").http_status == 409
    assert DatabaseError("boom", "commit").http_status == 503
    assert UpstreamError("x", "timeout").http_status == 503


def test_to_response_shape():
    body = EmailConflictError("a@b.io").to_response()
    error = body["error"]
    assert error["code"] == "EMAIL_CONFLICT"
    assert error["category"] == ErrorCategory.CONFLICT.value
    assert "a@b.io" in error["message"]
    assert "timestamp" in error


def test_upstream_error_keeps_status_code():
    exc = UpstreamError("HTTP 404", "http_status", status_code=404)
    assert exc.status_code == 404
    assert exc.failure_type == "http_status"
