"""
Output path helpers: extension advice and workspace resolution.
"""
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

# Last ".ext" of the final path segment
_EXTENSION_RE = re.compile(r'\.[^/.]+$')

RECOMMENDED_EXTENSIONS = {
    "terraform": ".tfvars",
    "shell": ".sh",
}
DEFAULT_EXTENSION = ".env"


@dataclass
class ValidationResult:
    """Validated path plus an optional advisory warning."""
    path: str
    warning: Optional[str] = None


def recommended_extension(fmt: str) -> str:
    return RECOMMENDED_EXTENSIONS.get((fmt or "").strip().lower(), DEFAULT_EXTENSION)


def suggest_path(file_path: str, extension: str) -> str:
    if _EXTENSION_RE.search(file_path):
        return _EXTENSION_RE.sub(extension, file_path)
    return file_path + extension


def validate_output_path(file_path: str, fmt: str) -> ValidationResult:
    """Check the file extension against the one recommended for the format.

    The returned path is always the input path; a mismatch only produces a
    warning naming the recommended extension and a corrected path.
    """
    extension = recommended_extension(fmt)
    if file_path.endswith(extension):
        return ValidationResult(path=file_path)

    warning = (
        f"Warning: Format is '{fmt}' but file extension is not '{extension}'. "
        f"Recommended: {suggest_path(file_path, extension)}"
    )
    return ValidationResult(path=file_path, warning=warning)


def resolve_output_path(file_output_path: str, workspace: Optional[Union[str, Path]] = None) -> Path:
    """Place the file-output-path input under the job workspace.

    The input is conventionally written with a leading slash ("/.env"); it is
    always interpreted relative to GITHUB_WORKSPACE, or the current directory
    when that is not set.
    """
    if workspace is None:
        workspace = os.environ.get('GITHUB_WORKSPACE') or os.getcwd()
    return Path(workspace) / file_output_path.lstrip('/')
