"""
Infisical HTTP client using the requests library.

Wraps the machine identity login endpoints and the raw secrets listing.
Every request carries the extra headers supplied to the action.
"""
import logging
from typing import Any, Dict, Optional, Type

import requests
from pydantic import ValidationError

from ..exceptions import ActionError, AuthExchangeError, FetchError
from .models import ErrorResponse, LoginResponse, RawSecretsResponse

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = "https://app.infisical.com"
USER_AGENT = "infisical-secrets-action"


class InfisicalClient:
    """HTTP client for a single Infisical server.

    One instance is created per run; it holds the base URL and the merged
    default headers, never the access token.
    """

    def __init__(self, domain: str = DEFAULT_DOMAIN, headers: Optional[Dict[str, str]] = None,
                 session: Optional[requests.Session] = None):
        """Initialize with the server's base URL.

        Args:
            domain: Base URL of the Infisical server (e.g., https://app.infisical.com)
            headers: Extra headers to include in every request
            session: Optional pre-built session (tests inject a mock here)
        """
        self.base_url = (domain or DEFAULT_DOMAIN).rstrip('/')
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': USER_AGENT})
        if headers:
            self.session.headers.update(headers)

    def _request(self, method: str, path: str, error_cls: Type[ActionError], **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            raise error_cls(_describe_http_error(e.response)) from e
        except requests.RequestException as e:
            raise error_cls(f"Request to {url} failed: {e}") from e

    def universal_auth_login(self, client_id: str, client_secret: str) -> str:
        """Exchange a Universal Auth client id and secret for an access token."""
        data = self._request(
            'POST', '/api/v1/auth/universal-auth/login', AuthExchangeError,
            json={'clientId': client_id, 'clientSecret': client_secret}
        )
        return _access_token(data)

    def oidc_login(self, identity_id: str, oidc_audience: str = "") -> str:
        """Exchange the job's GitHub OIDC token for an access token."""
        from ..auth.oidc import get_github_id_token

        id_token = get_github_id_token(oidc_audience or None)
        data = self._request(
            'POST', '/api/v1/auth/oidc-auth/login', AuthExchangeError,
            json={'identityId': identity_id, 'jwt': id_token}
        )
        return _access_token(data)

    def aws_iam_login(self, identity_id: str) -> str:
        """Exchange a signed STS GetCallerIdentity request for an access token."""
        from ..auth.aws import build_signed_identity_request

        signed = build_signed_identity_request()
        data = self._request(
            'POST', '/api/v1/auth/aws-auth/login', AuthExchangeError,
            json={'identityId': identity_id, **signed}
        )
        return _access_token(data)

    def get_raw_secrets(self, token: str, env_slug: str, project_slug: str, secret_path: str = "/",
                        include_imports: bool = True, recursive: bool = False) -> Dict[str, str]:
        """List the secrets of a project environment and path.

        Returns:
            Secret keys mapped to values, secrets of the path first
        """
        data = self._request(
            'GET', '/api/v3/secrets/raw', FetchError,
            headers={'Authorization': f'Bearer {token}'},
            params={
                'environment': env_slug,
                'workspaceSlug': project_slug,
                'secretPath': secret_path,
                'include_imports': str(include_imports).lower(),
                'recursive': str(recursive).lower(),
            }
        )
        try:
            secrets = RawSecretsResponse.model_validate(data).to_secret_map()
        except ValidationError as e:
            raise FetchError(f"Unexpected response from secrets endpoint: {e}") from e
        logger.debug(f"Fetched {len(secrets)} secrets from {project_slug}/{env_slug}{secret_path}")
        return secrets


def _access_token(data: Any) -> str:
    try:
        return LoginResponse.model_validate(data).access_token
    except ValidationError as e:
        raise AuthExchangeError(f"Unexpected response from login endpoint: {e}") from e


def _describe_http_error(response: requests.Response) -> str:
    description = f"Request failed with status code {response.status_code}"
    try:
        body = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return description
    if body.message:
        description += f": {body.message}"
    return description
