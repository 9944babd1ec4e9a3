from unittest import TestCase
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlparse

import requests

from taskshare.constants.messages import ApiErrors
from taskshare.exceptions.google_auth_exceptions import (
    GoogleAPIException,
    GoogleAuthException,
    GoogleDomainNotAllowedException,
)
from taskshare.services.google_oauth_service import GoogleOAuthService
from taskshare.tests.fixtures.user import google_user_info


class GoogleOAuthServiceTests(TestCase):
    def setUp(self) -> None:
        self.mock_settings = {
            "GOOGLE_OAUTH": {
                "CLIENT_ID": "test-client-id",
                "CLIENT_SECRET": "test-client-secret",
                "REDIRECT_URI": "http://localhost:5000/api/auth/google/callback",
                "SCOPES": ["openid", "email", "profile"],
                "WORKSPACE_DOMAIN": None,
            }
        }
        self.valid_tokens = {"access_token": "test-access-token"}

    def _response(self, status_code=200, payload=None):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = payload or {}
        return response

    @patch("taskshare.services.google_oauth_service.settings")
    @patch("taskshare.services.google_oauth_service.secrets")
    def test_get_authorization_url_success(self, mock_secrets, mock_settings):
        mock_settings.configure_mock(**self.mock_settings)
        mock_secrets.token_urlsafe.return_value = "test-state"

        auth_url, state = GoogleOAuthService.get_authorization_url()

        self.assertEqual(state, "test-state")
        self.assertTrue(auth_url.startswith(GoogleOAuthService.GOOGLE_AUTH_URL))
        params = parse_qs(urlparse(auth_url).query)
        self.assertEqual(params["client_id"], ["test-client-id"])
        self.assertEqual(params["scope"], ["openid email profile"])
        self.assertEqual(params["state"], ["test-state"])
        self.assertNotIn("hd", params)

    @patch("taskshare.services.google_oauth_service.settings")
    def test_get_authorization_url_adds_hosted_domain(self, mock_settings):
        self.mock_settings["GOOGLE_OAUTH"]["WORKSPACE_DOMAIN"] = "example.com"
        mock_settings.configure_mock(**self.mock_settings)

        auth_url, _ = GoogleOAuthService.get_authorization_url()

        self.assertEqual(parse_qs(urlparse(auth_url).query)["hd"], ["example.com"])

    @patch("taskshare.services.google_oauth_service.settings")
    def test_get_authorization_url_error(self, mock_settings):
        mock_settings.GOOGLE_OAUTH = None

        with self.assertRaises(GoogleAuthException) as context:
            GoogleOAuthService.get_authorization_url()
        self.assertIn(ApiErrors.GOOGLE_AUTH_FAILED, str(context.exception))

    @patch("taskshare.services.google_oauth_service.settings")
    @patch("taskshare.services.google_oauth_service.requests")
    def test_handle_callback_success(self, mock_requests, mock_settings):
        mock_settings.configure_mock(**self.mock_settings)
        mock_requests.exceptions = requests.exceptions
        mock_requests.post.return_value = self._response(payload=self.valid_tokens)
        mock_requests.get.return_value = self._response(payload=google_user_info)

        assertion = GoogleOAuthService.handle_callback("test-code")

        self.assertEqual(assertion.external_id, "google-alice")
        self.assertEqual(assertion.email, "alice@example.com")
        self.assertEqual(assertion.name, "Alice")
        post_kwargs = mock_requests.post.call_args.kwargs
        self.assertEqual(post_kwargs["data"]["code"], "test-code")
        self.assertEqual(post_kwargs["data"]["grant_type"], "authorization_code")
        self.assertEqual(
            mock_requests.get.call_args.kwargs["headers"], {"Authorization": "Bearer test-access-token"}
        )

    @patch("taskshare.services.google_oauth_service.settings")
    @patch("taskshare.services.google_oauth_service.requests")
    def test_handle_callback_token_exchange_failure(self, mock_requests, mock_settings):
        mock_settings.configure_mock(**self.mock_settings)
        mock_requests.exceptions = requests.exceptions
        mock_requests.post.return_value = self._response(status_code=400)

        with self.assertRaises(GoogleAPIException) as context:
            GoogleOAuthService.handle_callback("bad-code")
        self.assertEqual(context.exception.message, ApiErrors.TOKEN_EXCHANGE_FAILED)

    @patch("taskshare.services.google_oauth_service.settings")
    @patch("taskshare.services.google_oauth_service.requests")
    def test_handle_callback_network_error(self, mock_requests, mock_settings):
        mock_settings.configure_mock(**self.mock_settings)
        mock_requests.exceptions = requests.exceptions
        mock_requests.post.side_effect = requests.exceptions.ConnectionError()

        with self.assertRaises(GoogleAPIException):
            GoogleOAuthService.handle_callback("test-code")

    @patch("taskshare.services.google_oauth_service.settings")
    @patch("taskshare.services.google_oauth_service.requests")
    def test_handle_callback_missing_id(self, mock_requests, mock_settings):
        mock_settings.configure_mock(**self.mock_settings)
        mock_requests.exceptions = requests.exceptions
        mock_requests.post.return_value = self._response(payload=self.valid_tokens)
        mock_requests.get.return_value = self._response(payload={"email": "alice@example.com"})

        with self.assertRaises(GoogleAPIException) as context:
            GoogleOAuthService.handle_callback("test-code")
        self.assertEqual(context.exception.message, ApiErrors.MISSING_USER_INFO_FIELDS.format("id"))

    @patch("taskshare.services.google_oauth_service.settings")
    @patch("taskshare.services.google_oauth_service.requests")
    def test_handle_callback_rejects_other_domain(self, mock_requests, mock_settings):
        self.mock_settings["GOOGLE_OAUTH"]["WORKSPACE_DOMAIN"] = "corp.example"
        mock_settings.configure_mock(**self.mock_settings)
        mock_requests.exceptions = requests.exceptions
        mock_requests.post.return_value = self._response(payload=self.valid_tokens)
        mock_requests.get.return_value = self._response(payload=google_user_info)

        with self.assertRaises(GoogleDomainNotAllowedException):
            GoogleOAuthService.handle_callback("test-code")

    @patch("taskshare.services.google_oauth_service.settings")
    @patch("taskshare.services.google_oauth_service.requests")
    def test_handle_callback_accepts_workspace_domain(self, mock_requests, mock_settings):
        self.mock_settings["GOOGLE_OAUTH"]["WORKSPACE_DOMAIN"] = "Example.com"
        mock_settings.configure_mock(**self.mock_settings)
        mock_requests.exceptions = requests.exceptions
        mock_requests.post.return_value = self._response(payload=self.valid_tokens)
        mock_requests.get.return_value = self._response(payload=google_user_info)

        assertion = GoogleOAuthService.handle_callback("test-code")
        self.assertEqual(assertion.email, "alice@example.com")
