"""
Machine identity authentication against an Infisical server.
"""

from .dispatcher import AuthMethod, Credentials, authenticate

__all__ = [
    'AuthMethod',
    'Credentials',
    'authenticate',
]
