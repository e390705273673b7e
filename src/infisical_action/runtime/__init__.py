"""
Host integration for the export action.
"""

from .context import (
    RunContext,
    GitHubActionsContext,
    ConsoleRunContext,
    InMemoryRunContext,
    input_env_name,
)

__all__ = [
    'RunContext',
    'GitHubActionsContext',
    'ConsoleRunContext',
    'InMemoryRunContext',
    'input_env_name',
]
