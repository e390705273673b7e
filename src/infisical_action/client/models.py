"""Pydantic models for Infisical API payloads.

Only the fields the action reads are declared; everything else in the
responses is ignored.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class LoginResponse(BaseModel):
    """Response from any machine identity login endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    expires_in: Optional[int] = Field(default=None, alias="expiresIn")
    token_type: Optional[str] = Field(default=None, alias="tokenType")


class RawSecret(BaseModel):
    """A single secret as returned by the raw secrets endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    secret_key: str = Field(alias="secretKey")
    secret_value: str = Field(default="", alias="secretValue")
    secret_path: Optional[str] = Field(default=None, alias="secretPath")


class SecretImport(BaseModel):
    """Secrets pulled in from another environment or path."""
    model_config = ConfigDict(populate_by_name=True)

    secret_path: Optional[str] = Field(default=None, alias="secretPath")
    environment: Optional[str] = None
    secrets: List[RawSecret] = []


class RawSecretsResponse(BaseModel):
    """Response from listing raw secrets."""
    secrets: List[RawSecret] = []
    imports: List[SecretImport] = []

    def to_secret_map(self) -> Dict[str, str]:
        """Flatten into a key/value map.

        Secrets of the requested path win; imports only fill missing keys,
        with later imports taking precedence over earlier ones.
        """
        secret_map = {s.secret_key: s.secret_value for s in self.secrets}
        for imported in reversed(self.imports):
            for secret in imported.secrets:
                secret_map.setdefault(secret.secret_key, secret.secret_value)
        return secret_map


class ErrorResponse(BaseModel):
    """Error body returned by the server on non-2xx responses."""
    message: Optional[str] = None
    error: Optional[str] = None
    status_code: Optional[int] = Field(default=None, alias="statusCode")
