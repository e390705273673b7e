"""Tests for the Infisical HTTP client."""

from unittest.mock import Mock, patch

import pytest
import requests

from infisical_action.client import InfisicalClient
from infisical_action.client.models import RawSecretsResponse
from infisical_action.exceptions import AuthExchangeError, FetchError


def _response(status_code=200, payload=None):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


class TestInfisicalClient:
    """Request construction and error mapping."""

    def test_extra_headers_are_applied(self, mock_session):
        InfisicalClient("https://eu.infisical.com/", {"x-a": "1, 2"}, session=mock_session)

        assert mock_session.headers["x-a"] == "1, 2"
        assert mock_session.headers["User-Agent"] == "infisical-secrets-action"

    def test_universal_auth_login(self, mock_session):
        mock_session.request.return_value = _response(payload={"accessToken": "tok", "expiresIn": 7200})
        client = InfisicalClient("https://eu.infisical.com/", session=mock_session)

        assert client.universal_auth_login("id", "secret") == "tok"
        mock_session.request.assert_called_once_with(
            'POST', "https://eu.infisical.com/api/v1/auth/universal-auth/login",
            json={'clientId': 'id', 'clientSecret': 'secret'}
        )

    def test_login_http_error_uses_server_message(self, mock_session):
        mock_session.request.return_value = _response(401, {"message": "Invalid credentials"})
        client = InfisicalClient(session=mock_session)

        with pytest.raises(AuthExchangeError) as exc:
            client.universal_auth_login("id", "bad")
        assert str(exc.value) == "Request failed with status code 401: Invalid credentials"

    def test_login_connection_error(self, mock_session):
        mock_session.request.side_effect = requests.ConnectionError("connection refused")
        client = InfisicalClient("http://localhost:8080", session=mock_session)

        with pytest.raises(AuthExchangeError, match="connection refused"):
            client.universal_auth_login("id", "secret")
        assert mock_session.request.call_count == 1

    def test_login_without_token(self, mock_session):
        mock_session.request.return_value = _response(payload={"unexpected": True})
        client = InfisicalClient(session=mock_session)

        with pytest.raises(AuthExchangeError, match="Unexpected response"):
            client.universal_auth_login("id", "secret")

    def test_oidc_login_sends_github_token(self, mock_session):
        mock_session.request.return_value = _response(payload={"accessToken": "tok"})
        client = InfisicalClient(session=mock_session)

        with patch("infisical_action.auth.oidc.get_github_id_token", return_value="id.jwt") as get_token:
            assert client.oidc_login("identity", "aud") == "tok"

        get_token.assert_called_once_with("aud")
        assert mock_session.request.call_args.kwargs['json'] == {'identityId': 'identity', 'jwt': 'id.jwt'}

    def test_aws_iam_login_sends_signed_request(self, mock_session):
        mock_session.request.return_value = _response(payload={"accessToken": "tok"})
        client = InfisicalClient(session=mock_session)
        signed = {"iamHttpRequestMethod": "POST", "iamRequestBody": "Ym9keQ==", "iamRequestHeaders": "e30="}

        with patch("infisical_action.auth.aws.build_signed_identity_request", return_value=signed):
            assert client.aws_iam_login("identity") == "tok"

        assert mock_session.request.call_args.args[1].endswith("/api/v1/auth/aws-auth/login")
        assert mock_session.request.call_args.kwargs['json'] == {'identityId': 'identity', **signed}

    def test_get_raw_secrets(self, mock_session):
        mock_session.request.return_value = _response(payload={
            "secrets": [
                {"secretKey": "A", "secretValue": "1"},
                {"secretKey": "B", "secretValue": "2"},
            ],
            "imports": [],
        })
        client = InfisicalClient(session=mock_session)

        secrets = client.get_raw_secrets("tok", env_slug="dev", project_slug="web", secret_path="/api",
                                         include_imports=False, recursive=True)

        assert secrets == {"A": "1", "B": "2"}
        method, url = mock_session.request.call_args.args
        assert (method, url) == ('GET', "https://app.infisical.com/api/v3/secrets/raw")
        assert mock_session.request.call_args.kwargs == {
            'headers': {'Authorization': 'Bearer tok'},
            'params': {
                'environment': 'dev',
                'workspaceSlug': 'web',
                'secretPath': '/api',
                'include_imports': 'false',
                'recursive': 'true',
            },
        }

    def test_get_raw_secrets_http_error(self, mock_session):
        mock_session.request.return_value = _response(404, {"message": "Folder not found"})
        client = InfisicalClient(session=mock_session)

        with pytest.raises(FetchError, match="Folder not found"):
            client.get_raw_secrets("tok", env_slug="dev", project_slug="web")

    def test_http_error_without_json_body(self, mock_session):
        response = _response(502)
        response.json.side_effect = ValueError("not json")
        mock_session.request.return_value = response
        client = InfisicalClient(session=mock_session)

        with pytest.raises(FetchError) as exc:
            client.get_raw_secrets("tok", env_slug="dev", project_slug="web")
        assert str(exc.value) == "Request failed with status code 502"


class TestRawSecretsResponse:
    """Merging of imported secrets."""

    def test_direct_secrets_win_over_imports(self):
        response = RawSecretsResponse.model_validate({
            "secrets": [{"secretKey": "A", "secretValue": "direct"}],
            "imports": [
                {"secretPath": "/shared", "secrets": [
                    {"secretKey": "A", "secretValue": "imported"},
                    {"secretKey": "B", "secretValue": "first"},
                ]},
                {"secretPath": "/other", "secrets": [
                    {"secretKey": "B", "secretValue": "last"},
                    {"secretKey": "C", "secretValue": "c"},
                ]},
            ],
        })

        assert response.to_secret_map() == {"A": "direct", "B": "last", "C": "c"}

    def test_missing_sections(self):
        assert RawSecretsResponse.model_validate({}).to_secret_map() == {}
