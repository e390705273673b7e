"""Invoke entry point for working on this repository.

Examples:
    invoke export --config=infisical.yaml
    invoke cleanup --file-output-path=/.env
"""

from infisical_action import namespace  # noqa: F401
