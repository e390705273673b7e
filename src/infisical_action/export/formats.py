"""
Serialization of a secret mapping into the supported file grammars.

Each grammar is an ordered tuple of (pattern, replacement) passes applied to
the value, plus a line template. Backslash passes always come first so that
backslashes inserted by later passes are not escaped twice.
"""
import re
from enum import Enum
from typing import Dict, Pattern, Tuple

Pass = Tuple[Pattern, str]


class ExportFormat(str, Enum):
    """Supported output grammars."""
    TERRAFORM = "terraform"
    RAW = "raw"
    SHELL = "shell"
    DOTENV = "dotenv"
    DOTENV_SAFE = "dotenv-safe"

    @classmethod
    def parse(cls, name: str) -> 'ExportFormat':
        """Case-normalised lookup; unknown names fall back to dotenv-safe."""
        try:
            return cls((name or '').strip().lower())
        except ValueError:
            return cls.DOTENV_SAFE


TERRAFORM_PASSES: Tuple[Pass, ...] = (
    (re.compile(r'\\'), r'\\\\'),
    (re.compile(r'"'), r'\\"'),
    (re.compile(r'\n'), r'\\n'),
    (re.compile(r'\r'), r'\\r'),
    (re.compile(r'\t'), r'\\t'),
)

# One combined pass: escaping one character class must not re-escape another
RAW_PASSES: Tuple[Pass, ...] = (
    (re.compile(r'([\'"$`\\])'), r'\\\1'),
)

SHELL_PASSES: Tuple[Pass, ...] = (
    (re.compile(r"'"), r"'\\''"),
)

DOTENV_PASSES: Tuple[Pass, ...] = (
    (re.compile(r'\\'), r'\\\\'),
    (re.compile(r'"'), r'\\"'),
    (re.compile(r'\$'), r'\\$'),
    (re.compile(r'\n'), r'\\n'),
    (re.compile(r'\r'), r'\\r'),
)

GRAMMARS: Dict[ExportFormat, Tuple[Tuple[Pass, ...], str]] = {
    ExportFormat.TERRAFORM: (TERRAFORM_PASSES, '{key} = "{value}"'),
    ExportFormat.RAW: (RAW_PASSES, '{key}={value}'),
    ExportFormat.SHELL: (SHELL_PASSES, "export {key}='{value}'"),
    ExportFormat.DOTENV: (DOTENV_PASSES, '{key}="{value}"'),
    ExportFormat.DOTENV_SAFE: (DOTENV_PASSES, '{key}="{value}"'),
}


def escape_value(value: str, passes: Tuple[Pass, ...]) -> str:
    for pattern, replacement in passes:
        value = pattern.sub(replacement, value)
    return value


def format_line(fmt: ExportFormat, key: str, value: str) -> str:
    """Render a single KEY/value pair in the given grammar."""
    passes, template = GRAMMARS[fmt]
    return template.format(key=key, value=escape_value(value, passes))


def format_secrets(secrets: Dict[str, str], fmt: str, prefix: str = "", suffix: str = "") -> str:
    """Serialize secrets into file content.

    Args:
        secrets: Secret keys mapped to values, emitted in insertion order
        fmt: Format name; unrecognized names use the dotenv-safe grammar
        prefix: Prepended to every key
        suffix: Appended to every key

    Returns:
        One line per secret joined with newlines, without a trailing newline
    """
    export_format = fmt if isinstance(fmt, ExportFormat) else ExportFormat.parse(fmt)
    return "\n".join(
        format_line(export_format, f"{prefix}{key}{suffix}", value)
        for key, value in secrets.items()
    )
