import logging
from urllib.parse import urlencode

from django.conf import settings
from django.http import HttpResponseRedirect
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskshare.constants.messages import AppMessages, LoginErrorFlags
from taskshare.dto.responses.message_response import MessageResponse
from taskshare.dto.user_dto import UserDTO
from taskshare.exceptions.google_auth_exceptions import GoogleDomainNotAllowedException
from taskshare.middlewares.jwt_auth import get_actor, get_cookie_config
from taskshare.repositories.registry import get_repositories
from taskshare.services.google_oauth_service import GoogleOAuthService
from taskshare.services.user_service import UserService
from taskshare.utils.jwt_utils import generate_token_pair

logger = logging.getLogger(__name__)

OAUTH_STATE_SESSION_KEY = "oauth_state"


def _app_url(path: str = "/") -> str:
    return f"{settings.APP_URL.rstrip('/')}{path}"


def _login_error_redirect(flag: str) -> HttpResponseRedirect:
    return HttpResponseRedirect(f"{_app_url('/login')}?{urlencode({'error': flag})}")


class GoogleLoginView(APIView):
    @extend_schema(
        operation_id="google_login",
        summary="Initiate Google OAuth login",
        description="Redirects to the Google consent screen, or returns the URL as JSON when format=json",
        tags=["auth"],
        parameters=[
            OpenApiParameter(
                name="format",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Response format: 'json' for JSON response, otherwise redirects",
                required=False,
            ),
        ],
        responses={
            200: OpenApiResponse(description="Google OAuth URL generated successfully"),
            302: OpenApiResponse(description="Redirect to Google OAuth URL"),
        },
    )
    def get(self, request: Request):
        auth_url, state = GoogleOAuthService.get_authorization_url()
        request.session[OAUTH_STATE_SESSION_KEY] = state

        if request.headers.get("Accept") == "application/json" or request.query_params.get("format") == "json":
            return Response(
                {
                    "message": AppMessages.GOOGLE_LOGIN_URL_GENERATED,
                    "authUrl": auth_url,
                }
            )

        return HttpResponseRedirect(auth_url)


class GoogleCallbackView(APIView):
    @extend_schema(
        operation_id="google_callback",
        summary="Handle Google OAuth callback",
        description=(
            "Exchanges the authorization code, resolves the local user (creating it on first login), "
            "sets the session cookies and redirects to the app. Failures redirect to /login?error=<flag>."
        ),
        tags=["auth"],
        parameters=[
            OpenApiParameter(
                name="code",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Authorization code from Google",
                required=True,
            ),
            OpenApiParameter(
                name="state",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="State parameter for CSRF protection",
                required=True,
            ),
            OpenApiParameter(
                name="error",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Error from Google OAuth",
                required=False,
            ),
        ],
        responses={302: OpenApiResponse(description="Redirect to the app root or to the login page")},
    )
    def get(self, request: Request):
        code = request.query_params.get("code")
        state = request.query_params.get("state")
        error = request.query_params.get("error")

        if error:
            logger.warning("Google OAuth returned an error: %s", error)
            return _login_error_redirect(LoginErrorFlags.AUTH_ERROR)

        if not code:
            return _login_error_redirect(LoginErrorFlags.MISSING_CODE)

        stored_state = request.session.pop(OAUTH_STATE_SESSION_KEY, None)
        if not state or not stored_state or stored_state != state:
            logger.warning("Google OAuth callback with mismatched state")
            return _login_error_redirect(LoginErrorFlags.INVALID_STATE)

        try:
            assertion = GoogleOAuthService.handle_callback(code)
            user = UserService(get_repositories().users).resolve_identity(assertion)
        except GoogleDomainNotAllowedException as e:
            logger.warning("Rejected login from domain %s", e.domain)
            return _login_error_redirect(LoginErrorFlags.DOMAIN_NOT_ALLOWED)
        except Exception:
            logger.warning("Google OAuth callback failed", exc_info=True)
            return _login_error_redirect(LoginErrorFlags.AUTH_FAILED)

        tokens = generate_token_pair({"user_id": user.id})
        response = HttpResponseRedirect(_app_url("/"))
        self._set_auth_cookies(response, tokens)
        return response

    def _set_auth_cookies(self, response, tokens):
        config = get_cookie_config()
        response.set_cookie(
            settings.COOKIE_SETTINGS.get("ACCESS_COOKIE_NAME"),
            tokens["access_token"],
            max_age=tokens["expires_in"],
            **config,
        )
        response.set_cookie(
            settings.COOKIE_SETTINGS.get("REFRESH_COOKIE_NAME"),
            tokens["refresh_token"],
            max_age=settings.JWT_CONFIG.get("REFRESH_TOKEN_LIFETIME"),
            **config,
        )


class CurrentUserView(APIView):
    @extend_schema(
        operation_id="get_current_user",
        summary="Get the authenticated user",
        tags=["auth"],
        responses={
            200: OpenApiResponse(response=UserDTO, description="Authenticated user"),
            401: OpenApiResponse(description="Not authenticated"),
        },
    )
    def get(self, request: Request):
        actor = get_actor(request)
        return Response(data=UserDTO.from_model(actor).model_dump(mode="json"), status=status.HTTP_200_OK)


class LogoutView(APIView):
    @extend_schema(
        operation_id="logout",
        summary="Logout user",
        description="Ends the session by clearing the authentication cookies",
        tags=["auth"],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Logout successful"),
            401: OpenApiResponse(description="Not authenticated"),
        },
    )
    def post(self, request: Request):
        get_actor(request)
        request.session.flush()

        response = Response(
            data=MessageResponse(message=AppMessages.LOGOUT_SUCCESS).model_dump(mode="json"),
            status=status.HTTP_200_OK,
        )
        self._clear_auth_cookies(response)
        return response

    def _clear_auth_cookies(self, response):
        delete_config = {
            "path": settings.COOKIE_SETTINGS.get("COOKIE_PATH", "/"),
            "domain": settings.COOKIE_SETTINGS.get("COOKIE_DOMAIN"),
        }

        response.delete_cookie(settings.COOKIE_SETTINGS.get("ACCESS_COOKIE_NAME"), **delete_config)
        response.delete_cookie(settings.COOKIE_SETTINGS.get("REFRESH_COOKIE_NAME"), **delete_config)
