"""
HTTP access to the Infisical API.
"""

from .headers import parse_headers
from .infisical import InfisicalClient, DEFAULT_DOMAIN

__all__ = [
    'parse_headers',
    'InfisicalClient',
    'DEFAULT_DOMAIN',
]
