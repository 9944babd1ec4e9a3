import logging

from django.conf import settings
from django.http import JsonResponse
from rest_framework import status

from taskshare.constants.messages import ApiErrors, AuthErrorMessages
from taskshare.dto.responses.error_response import ApiErrorDetail, ApiErrorResponse
from taskshare.exceptions.auth_exceptions import (
    AuthenticationRequiredError,
    RefreshTokenExpiredError,
    TokenExpiredError,
    TokenInvalidError,
    TokenMissingError,
)
from taskshare.models.user import UserModel
from taskshare.repositories.registry import get_repositories
from taskshare.utils.jwt_utils import generate_access_token, validate_access_token, validate_refresh_token

logger = logging.getLogger(__name__)


class JWTAuthenticationMiddleware:
    """
    Session boundary. Every non-public request must carry a signed access
    cookie, or a refresh cookie from which a new access cookie is issued.
    The token subject is re-read from storage on each request, so a token
    for a user that no longer exists is rejected.
    """

    def __init__(self, get_response) -> None:
        self.get_response = get_response

    def __call__(self, request):
        if self._is_public_path(request.path):
            return self.get_response(request)

        try:
            self._authenticate(request)
        except (TokenMissingError, TokenExpiredError, TokenInvalidError, RefreshTokenExpiredError) as e:
            logger.debug("Rejected request to %s: %s", request.path, e)
            return self._handle_auth_error(e)

        response = self.get_response(request)
        return self._process_response(request, response)

    def _authenticate(self, request) -> None:
        access_token = request.COOKIES.get(settings.COOKIE_SETTINGS.get("ACCESS_COOKIE_NAME"))
        if access_token:
            try:
                payload = validate_access_token(access_token)
                self._set_user_data(request, payload)
                return
            except (TokenExpiredError, TokenInvalidError):
                pass

        self._try_refresh(request, had_access_token=bool(access_token))

    def _try_refresh(self, request, had_access_token: bool) -> None:
        refresh_token = request.COOKIES.get(settings.COOKIE_SETTINGS.get("REFRESH_COOKIE_NAME"))
        if not refresh_token:
            if had_access_token:
                raise TokenInvalidError(AuthErrorMessages.TOKEN_INVALID)
            raise TokenMissingError(AuthErrorMessages.AUTHENTICATION_REQUIRED)

        payload = validate_refresh_token(refresh_token)
        self._set_user_data(request, payload)

        request._new_access_token = generate_access_token({"user_id": payload["user_id"]})
        request._access_token_expires = settings.JWT_CONFIG["ACCESS_TOKEN_LIFETIME"]

    def _set_user_data(self, request, payload):
        user_id = payload["user_id"]
        user = get_repositories().users.get_by_id(user_id)
        if not user:
            raise TokenInvalidError(AuthErrorMessages.UNKNOWN_TOKEN_SUBJECT)

        request.user_id = user.id
        request.actor = user

    def _process_response(self, request, response):
        """Set a fresh access cookie when the request was authenticated by refresh token"""
        if hasattr(request, "_new_access_token"):
            response.set_cookie(
                settings.COOKIE_SETTINGS.get("ACCESS_COOKIE_NAME"),
                request._new_access_token,
                max_age=request._access_token_expires,
                **get_cookie_config(),
            )
        return response

    def _is_public_path(self, path: str) -> bool:
        return any(path.startswith(public_path) for public_path in settings.PUBLIC_PATHS)

    def _handle_auth_error(self, exception):
        error_response = ApiErrorResponse(
            statusCode=status.HTTP_401_UNAUTHORIZED,
            message=str(exception),
            errors=[ApiErrorDetail(title=ApiErrors.AUTHENTICATION_FAILED, detail=str(exception))],
        )
        return JsonResponse(
            data=error_response.model_dump(mode="json", exclude_none=True),
            status=status.HTTP_401_UNAUTHORIZED,
        )


def get_cookie_config() -> dict:
    return {
        "path": settings.COOKIE_SETTINGS.get("COOKIE_PATH", "/"),
        "domain": settings.COOKIE_SETTINGS.get("COOKIE_DOMAIN"),
        "secure": settings.COOKIE_SETTINGS.get("COOKIE_SECURE"),
        "httponly": settings.COOKIE_SETTINGS.get("COOKIE_HTTPONLY", True),
        "samesite": settings.COOKIE_SETTINGS.get("COOKIE_SAMESITE"),
    }


def get_actor(request) -> UserModel:
    """The authenticated user for this request; raises when the request carries none."""
    actor = getattr(request, "actor", None)
    if actor is None:
        raise AuthenticationRequiredError()
    return actor
