import requests
import secrets
from urllib.parse import urlencode
from django.conf import settings

from taskshare.exceptions.google_auth_exceptions import (
    GoogleAPIException,
    GoogleAuthException,
    GoogleDomainNotAllowedException,
)
from taskshare.constants.messages import ApiErrors
from taskshare.models.user import ExternalIdentityAssertion


class GoogleOAuthService:
    GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
    GOOGLE_USER_INFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

    @classmethod
    def get_authorization_url(cls) -> tuple[str, str]:
        try:
            state = secrets.token_urlsafe(32)

            params = {
                "client_id": settings.GOOGLE_OAUTH["CLIENT_ID"],
                "redirect_uri": settings.GOOGLE_OAUTH["REDIRECT_URI"],
                "response_type": "code",
                "scope": " ".join(settings.GOOGLE_OAUTH["SCOPES"]),
                "access_type": "online",
                "prompt": "select_account",
                "state": state,
            }

            workspace_domain = settings.GOOGLE_OAUTH.get("WORKSPACE_DOMAIN")
            if workspace_domain:
                params["hd"] = workspace_domain

            auth_url = f"{cls.GOOGLE_AUTH_URL}?{urlencode(params)}"
            return auth_url, state

        except Exception:
            raise GoogleAuthException(ApiErrors.GOOGLE_AUTH_FAILED)

    @classmethod
    def handle_callback(cls, authorization_code: str) -> ExternalIdentityAssertion:
        try:
            tokens = cls._exchange_code_for_tokens(authorization_code)

            user_info = cls._get_user_info(tokens["access_token"])

        except Exception as e:
            if isinstance(e, GoogleAPIException):
                raise
            raise GoogleAPIException(ApiErrors.GOOGLE_API_ERROR)

        assertion = ExternalIdentityAssertion(
            external_id=str(user_info["id"]),
            email=user_info.get("email"),
            name=user_info.get("name"),
            picture=user_info.get("picture"),
        )
        cls._check_allowed_domain(assertion, user_info.get("hd"))
        return assertion

    @classmethod
    def _check_allowed_domain(cls, assertion: ExternalIdentityAssertion, hosted_domain: str | None) -> None:
        """The hd URL parameter is only a hint to Google, so the domain is verified again here."""
        workspace_domain = settings.GOOGLE_OAUTH.get("WORKSPACE_DOMAIN")
        if not workspace_domain:
            return

        email_domain = (assertion.email or "").rpartition("@")[2].lower()
        if email_domain != workspace_domain.lower() and (hosted_domain or "").lower() != workspace_domain.lower():
            raise GoogleDomainNotAllowedException(workspace_domain)

    @classmethod
    def _exchange_code_for_tokens(cls, code: str) -> dict:
        """Exchange authorization code for tokens"""
        try:
            data = {
                "client_id": settings.GOOGLE_OAUTH["CLIENT_ID"],
                "client_secret": settings.GOOGLE_OAUTH["CLIENT_SECRET"],
                "code": code,
                "grant_type": "authorization_code",
                "redirect_uri": settings.GOOGLE_OAUTH["REDIRECT_URI"],
            }

            response = requests.post(cls.GOOGLE_TOKEN_URL, data=data, timeout=30)

            if response.status_code != 200:
                raise GoogleAPIException(ApiErrors.TOKEN_EXCHANGE_FAILED)

            tokens = response.json()

            if "error" in tokens:
                raise GoogleAPIException(ApiErrors.GOOGLE_API_ERROR)

            return tokens

        except requests.exceptions.RequestException:
            raise GoogleAPIException(ApiErrors.GOOGLE_API_ERROR)

    @classmethod
    def _get_user_info(cls, access_token: str) -> dict:
        try:
            headers = {"Authorization": f"Bearer {access_token}"}
            response = requests.get(cls.GOOGLE_USER_INFO_URL, headers=headers, timeout=30)

            if response.status_code != 200:
                raise GoogleAPIException(ApiErrors.USER_INFO_FETCH_FAILED.format("HTTP error"))

            user_info = response.json()

            # email may be absent; UserService.resolve_identity rejects that case
            if "id" not in user_info:
                raise GoogleAPIException(ApiErrors.MISSING_USER_INFO_FIELDS.format("id"))

            return user_info

        except requests.exceptions.RequestException:
            raise GoogleAPIException(ApiErrors.GOOGLE_API_ERROR)
