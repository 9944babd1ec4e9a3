from unittest.mock import Mock, patch
from urllib.parse import parse_qs, urlparse

from django.conf import settings
from rest_framework import status
from rest_framework.reverse import reverse
from rest_framework.test import APIClient

from taskshare.constants.messages import AppMessages, LoginErrorFlags
from taskshare.exceptions.google_auth_exceptions import GoogleAPIException, GoogleDomainNotAllowedException
from taskshare.models.user import ExternalIdentityAssertion
from taskshare.tests.fixtures.user import google_assertion
from taskshare.tests.integration.base_api_test import BaseApiTestCase
from taskshare.utils.jwt_utils import validate_access_token


class GoogleLoginViewTests(BaseApiTestCase):
    def test_redirects_to_google(self):
        response = self.client.get(reverse("google_login"))

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertTrue(response.url.startswith("https://accounts.google.com/o/oauth2/v2/auth"))

    def test_returns_json_when_requested(self):
        response = self.client.get(reverse("google_login"), {"format": "json"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], AppMessages.GOOGLE_LOGIN_URL_GENERATED)
        self.assertIn("state=", response.data["authUrl"])


class GoogleCallbackViewTests(BaseApiTestCase):
    def setUp(self):
        super().setUp()
        login_response = self.client.get(reverse("google_login"), {"format": "json"})
        self.state = parse_qs(urlparse(login_response.data["authUrl"]).query)["state"][0]
        self.url = reverse("google_callback")

    def _assert_login_error(self, response, flag):
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response.url, f"{settings.APP_URL}/login?error={flag}")

    @patch("taskshare.views.auth.GoogleOAuthService.handle_callback")
    def test_existing_user_logs_in(self, mock_handle_callback: Mock):
        mock_handle_callback.return_value = google_assertion

        response = self.client.get(self.url, {"code": "test-code", "state": self.state})

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response.url, f"{settings.APP_URL}/")
        access_cookie = response.cookies[settings.COOKIE_SETTINGS["ACCESS_COOKIE_NAME"]]
        self.assertEqual(validate_access_token(access_cookie.value)["user_id"], self.alice.id)
        self.assertIn(settings.COOKIE_SETTINGS["REFRESH_COOKIE_NAME"], response.cookies)
        self.assertTrue(access_cookie["httponly"])

    @patch("taskshare.views.auth.GoogleOAuthService.handle_callback")
    def test_first_login_creates_user(self, mock_handle_callback: Mock):
        mock_handle_callback.return_value = ExternalIdentityAssertion(
            external_id="google-dave", email="dave@example.com", name="Dave"
        )

        response = self.client.get(self.url, {"code": "test-code", "state": self.state})

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        dave = self.repositories.users.get_by_external_id("google-dave")
        self.assertIsNotNone(dave)
        self.assertEqual(dave.name, "Dave")

    def test_provider_error_redirects_to_login(self):
        response = self.client.get(self.url, {"error": "access_denied", "state": self.state})
        self._assert_login_error(response, LoginErrorFlags.AUTH_ERROR)

    def test_missing_code_redirects_to_login(self):
        response = self.client.get(self.url, {"state": self.state})
        self._assert_login_error(response, LoginErrorFlags.MISSING_CODE)

    def test_state_mismatch_redirects_to_login(self):
        response = self.client.get(self.url, {"code": "test-code", "state": "forged"})
        self._assert_login_error(response, LoginErrorFlags.INVALID_STATE)

    @patch("taskshare.views.auth.GoogleOAuthService.handle_callback")
    def test_state_cannot_be_replayed(self, mock_handle_callback: Mock):
        mock_handle_callback.return_value = google_assertion
        self.client.get(self.url, {"code": "test-code", "state": self.state})

        response = self.client.get(self.url, {"code": "test-code", "state": self.state})
        self._assert_login_error(response, LoginErrorFlags.INVALID_STATE)

    @patch("taskshare.views.auth.GoogleOAuthService.handle_callback")
    def test_provider_failure_redirects_to_login(self, mock_handle_callback: Mock):
        mock_handle_callback.side_effect = GoogleAPIException()

        response = self.client.get(self.url, {"code": "test-code", "state": self.state})

        self._assert_login_error(response, LoginErrorFlags.AUTH_FAILED)
        self.assertNotIn(settings.COOKIE_SETTINGS["ACCESS_COOKIE_NAME"], response.cookies)

    @patch("taskshare.views.auth.GoogleOAuthService.handle_callback")
    def test_missing_email_redirects_to_login(self, mock_handle_callback: Mock):
        mock_handle_callback.return_value = ExternalIdentityAssertion(external_id="google-dave")

        response = self.client.get(self.url, {"code": "test-code", "state": self.state})

        self._assert_login_error(response, LoginErrorFlags.AUTH_FAILED)
        self.assertIsNone(self.repositories.users.get_by_external_id("google-dave"))

    @patch("taskshare.views.auth.GoogleOAuthService.handle_callback")
    def test_disallowed_domain_redirects_to_login(self, mock_handle_callback: Mock):
        mock_handle_callback.side_effect = GoogleDomainNotAllowedException("corp.example")

        response = self.client.get(self.url, {"code": "test-code", "state": self.state})
        self._assert_login_error(response, LoginErrorFlags.DOMAIN_NOT_ALLOWED)


class CurrentUserViewTests(BaseApiTestCase):
    def test_returns_actor(self):
        response = self.client_for(self.bob).get(reverse("current_user"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data,
            {"id": self.bob.id, "email": "bob@example.com", "name": "Bob", "picture": None},
        )

    def test_requires_authentication(self):
        response = APIClient().get(reverse("current_user"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class LogoutViewTests(BaseApiTestCase):
    def test_logout_clears_cookies(self):
        response = self.client_for(self.alice).post(reverse("logout"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"message": AppMessages.LOGOUT_SUCCESS})
        for cookie_name in (
            settings.COOKIE_SETTINGS["ACCESS_COOKIE_NAME"],
            settings.COOKIE_SETTINGS["REFRESH_COOKIE_NAME"],
        ):
            self.assertEqual(response.cookies[cookie_name].value, "")
            self.assertEqual(response.cookies[cookie_name]["max-age"], 0)

    def test_logout_requires_authentication(self):
        response = APIClient().post(reverse("logout"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
