"""
GitHub Actions OIDC token retrieval.
"""
import logging
import os
from typing import Optional
from urllib.parse import quote

import jwt
import requests

from ..exceptions import AuthExchangeError, ConfigurationError

logger = logging.getLogger(__name__)


def log_id_token_claims(token: str) -> None:
    """Log who the ID token identifies, never failing regardless of token format."""
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
        logger.debug(f"OIDC token subject: {claims.get('sub')}, audience: {claims.get('aud')}")
    except jwt.InvalidTokenError as e:
        logger.debug(f"OIDC token claims could not be parsed ({e})")


def get_github_id_token(audience: Optional[str] = None) -> str:
    """Request an ID token for the running job from the GitHub OIDC provider.

    Args:
        audience: Optional audience claim to request

    Raises:
        ConfigurationError: If the job was not granted the id-token permission
        AuthExchangeError: If the provider does not return a token
    """
    request_url = os.environ.get('ACTIONS_ID_TOKEN_REQUEST_URL')
    request_token = os.environ.get('ACTIONS_ID_TOKEN_REQUEST_TOKEN')
    if not request_url or not request_token:
        raise ConfigurationError(
            "Unable to get ACTIONS_ID_TOKEN_REQUEST_URL env variable; "
            "add 'permissions: id-token: write' to the workflow",
            field="oidc-audience"
        )

    if audience:
        request_url = f"{request_url}&audience={quote(audience, safe='')}"

    try:
        response = requests.get(request_url, headers={'Authorization': f'Bearer {request_token}'})
        response.raise_for_status()
        id_token = response.json().get('value')
    except requests.RequestException as e:
        raise AuthExchangeError(f"Failed to get ID Token. {e}") from e

    if not id_token:
        raise AuthExchangeError("Response json body do not have ID Token field")

    log_id_token_claims(id_token)
    return id_token
