"""
Secret export: file grammars and output path handling.
"""

from .formats import ExportFormat, format_line, format_secrets
from .paths import ValidationResult, validate_output_path, resolve_output_path, recommended_extension

__all__ = [
    'ExportFormat',
    'format_line',
    'format_secrets',
    'ValidationResult',
    'validate_output_path',
    'resolve_output_path',
    'recommended_extension',
]
