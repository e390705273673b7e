"""
Authentication method dispatch.

Selects exactly one machine identity login from the method input. The
selector alone decides the branch: credentials for another method never
cause a fallback.
"""
import logging
from enum import Enum
from typing import Optional, Protocol

from pydantic import BaseModel

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class AuthMethod(str, Enum):
    """Supported machine identity login methods."""
    UNIVERSAL = "universal"
    OIDC = "oidc"
    AWS_IAM = "aws-iam"


class Credentials(BaseModel):
    """Every credential input; which fields matter depends on the method."""
    client_id: str = ""
    client_secret: str = ""
    identity_id: str = ""
    oidc_audience: str = ""


class TokenExchange(Protocol):
    """The three login calls a client must offer."""

    def universal_auth_login(self, client_id: str, client_secret: str) -> str: ...

    def oidc_login(self, identity_id: str, oidc_audience: str = "") -> str: ...

    def aws_iam_login(self, identity_id: str) -> str: ...


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def authenticate(client: TokenExchange, method: str, credentials: Credentials) -> str:
    """Obtain an access token with the selected method.

    Args:
        client: Object performing the login calls
        method: One of universal, oidc, aws-iam (exact match)
        credentials: Credential inputs

    Returns:
        The access token exactly as returned by the login call

    Raises:
        ConfigurationError: Unknown method or missing credentials, before any network call
    """
    try:
        auth_method = AuthMethod(method)
    except ValueError:
        raise ConfigurationError(f"Invalid authentication method: {method}", field="method") from None

    logger.debug(f"Authenticating with {auth_method.value} auth")

    if auth_method is AuthMethod.UNIVERSAL:
        if not _present(credentials.client_id):
            raise ConfigurationError("Missing universal auth credentials", field="client-id")
        if not _present(credentials.client_secret):
            raise ConfigurationError("Missing universal auth credentials", field="client-secret")
        return client.universal_auth_login(credentials.client_id, credentials.client_secret)

    if auth_method is AuthMethod.OIDC:
        if not _present(credentials.identity_id):
            raise ConfigurationError("Missing identity ID for OIDC auth", field="identity-id")
        return client.oidc_login(credentials.identity_id, credentials.oidc_audience)

    if auth_method is AuthMethod.AWS_IAM:
        if not _present(credentials.identity_id):
            raise ConfigurationError("Missing identity ID for AWS IAM auth", field="identity-id")
        return client.aws_iam_login(credentials.identity_id)

    raise ConfigurationError(f"Invalid authentication method: {method}", field="method")
