"""
Tests for error code to HTTP status mapping and the DRF exception handler.
"""

import pytest
from rest_framework import exceptions, status

from core.error_codes import ErrorCode, http_status_for
from core.exception_handler import api_exception_handler
from core.exceptions import BaseApplicationError, ExternalServiceError


class TestHttpStatusFor:
    @pytest.mark.parametrize(
        "error_code,expected",
        [
            (ErrorCode.CHAT_NOT_FOUND, status.HTTP_404_NOT_FOUND),
            (ErrorCode.INVALID_CREDENTIALS, status.HTTP_401_UNAUTHORIZED),
            (ErrorCode.REFRESH_TOKEN_EXPIRED, status.HTTP_401_UNAUTHORIZED),
            (ErrorCode.SHORTNAME_ALREADY_TAKEN, status.HTTP_409_CONFLICT),
            (ErrorCode.GROUP_DELETED, status.HTTP_410_GONE),
            (ErrorCode.NOT_A_CREATOR, status.HTTP_400_BAD_REQUEST),
            (ErrorCode.VALIDATION_ERROR, status.HTTP_400_BAD_REQUEST),
            (ErrorCode.EXTERNAL_SERVICE_ERROR, status.HTTP_503_SERVICE_UNAVAILABLE),
            ("SOMETHING_NEW", status.HTTP_400_BAD_REQUEST),
            (None, status.HTTP_400_BAD_REQUEST),
        ],
    )
    def test_mapping(self, error_code, expected):
        assert http_status_for(error_code) == expected


class TestApiExceptionHandler:
    def test_application_error(self):
        """
        Application errors use the same envelope as handler failures.

        Why it matters: Clients parse one error shape everywhere.
        """
        exc = ExternalServiceError("Email delivery failed", details={"recipient": "a@b.c"})

        response = api_exception_handler(exc, {"view": None})

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data == {
            "success": False,
            "error": "Email delivery failed",
            "error_code": "EXTERNAL_SERVICE_ERROR",
            "details": {"recipient": "a@b.c"},
        }

    def test_base_error_defaults(self):
        response = api_exception_handler(BaseApplicationError("Bad"), {"view": None})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "APPLICATION_ERROR"

    def test_drf_authentication_error(self):
        response = api_exception_handler(exceptions.NotAuthenticated(), {"view": None})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data["success"] is False
        assert response.data["error_code"] == "NOT_AUTHENTICATED"

    def test_drf_validation_error(self):
        exc = exceptions.ValidationError({"text": ["This field is required."]})

        response = api_exception_handler(exc, {"view": None})

        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert response.data["errors"] == {"text": ["This field is required."]}

    def test_unknown_exception_is_left_to_django(self):
        assert api_exception_handler(RuntimeError("boom"), {"view": None}) is None
