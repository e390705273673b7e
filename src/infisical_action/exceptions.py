"""
Exception classes with built-in guidance for the export action.
"""
from typing import Optional


class ActionError(Exception):
    """Base exception for all errors that abort an export run."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    @property
    def guidance(self) -> str:
        """Human remediation text printed by the CLI tasks."""
        return self._generate_guidance()

    def _generate_guidance(self):
        """Override in subclasses to provide specific guidance."""
        return f"""
❌ {self}
💡 Check the action inputs and try again
"""


class ConfigurationError(ActionError):
    """Raised for missing or invalid inputs, before any network call is made."""

    def _generate_guidance(self):
        if self.field is None:
            return super()._generate_guidance()
        env_name = f"INPUT_{self.field.replace(' ', '_').upper()}"
        return f"""
❌ Configuration error: {self}
💡 Resolve this in one of the following ways:
   1. Set the '{self.field}' input in your workflow step
   2. Or export {env_name} before running the task locally
"""


class AuthExchangeError(ActionError):
    """Raised when the server rejects or fails a credential exchange."""

    def _generate_guidance(self):
        return f"""
❌ Authentication failed: {self}
💡 Verify the machine identity is attached to the project and the 'domain' input points at your server
"""


class FetchError(ActionError):
    """Raised when listing secrets fails."""

    def _generate_guidance(self):
        return f"""
❌ Could not fetch secrets: {self}
💡 Check 'project-slug', 'env-slug' and 'secret-path', and the identity's access to them
"""


class WriteError(ActionError):
    """Raised when the exported secrets file cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, field="file-output-path")
        self.path = path

    def _generate_guidance(self):
        return f"""
❌ Could not write {self.path or 'the output file'}: {self}
💡 Make sure the parent directory of 'file-output-path' exists and is writable
"""


class ExportError(ActionError):
    """Raised when the secrets cannot be exported as environment variables.

    Nothing is exported when this is raised.
    """

    def _generate_guidance(self):
        return f"""
❌ Could not export secrets: {self}
💡 Check 'env-prefix', 'env-suffix' and the secret names, or use export-type 'file'
"""
