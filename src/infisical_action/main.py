"""
Main step of the action: authenticate, fetch secrets, export them.

Side effects are strictly ordered: the token is obtained before secrets are
fetched, secrets are fetched before anything is exported, and the output path
is validated before the file is written.
"""
import json
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Dict, Optional

from .auth import authenticate
from .client import InfisicalClient, parse_headers
from .config.inputs import ActionInputs, load_inputs
from .config.logging import bootstrap_logging
from .exceptions import WriteError
from .export import format_secrets, resolve_output_path, validate_output_path
from .runtime import GitHubActionsContext, RunContext

logger = logging.getLogger(__name__)


def export_to_env(context: RunContext, secrets: Dict[str, str], prefix: str, suffix: str) -> None:
    """Export every secret, or none of them."""
    variables = {f"{prefix}{key}{suffix}": value for key, value in secrets.items()}
    for value in variables.values():
        context.set_secret(value)
    context.export_variables(variables)
    context.info("Injected secrets as environment variables")


def write_secrets_file(path: Path, content: str) -> None:
    """Replace the file with the whole content, readable by the owner only.

    The content goes to a 0600 temporary file beside the target, which is
    then renamed over it, so a failure leaves any previous file untouched.

    Raises:
        WriteError: If the content cannot be encoded or the file cannot be written
    """
    try:
        data = content.encode('utf-8')
    except UnicodeEncodeError as e:
        raise WriteError(f"Secret value is not valid UTF-8: {e.reason}", path=str(path)) from e

    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise WriteError(str(e), path=str(path)) from e

    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise WriteError(str(e), path=str(path)) from e


def export_to_file(context: RunContext, secrets: Dict[str, str], inputs: ActionInputs,
                   workspace: Optional[str] = None) -> Path:
    content = format_secrets(secrets, inputs.file_output_format, inputs.env_prefix, inputs.env_suffix)
    file_path = resolve_output_path(inputs.file_output_path, workspace)

    try:
        validation = validate_output_path(inputs.file_output_path, inputs.file_output_format)
        if validation.warning:
            context.warning(validation.warning)

        context.info(f"Exporting secrets to {file_path} in {inputs.file_output_format} format")
        write_secrets_file(file_path, content)
        context.info("Successfully exported secrets to file")
    except WriteError as e:
        context.error(f"Error writing file: {e}")
        raise

    return file_path


def run_export(context: RunContext, inputs: Optional[ActionInputs] = None,
               client: Optional[InfisicalClient] = None,
               workspace: Optional[str] = None) -> Dict[str, str]:
    """Run the export once.

    Args:
        context: Host capabilities (inputs, masking, variables, messages)
        inputs: Pre-resolved inputs; read from the context when omitted
        client: Pre-built client; built from domain and extra-headers when omitted
        workspace: Directory file-output-path is relative to (GITHUB_WORKSPACE by default)

    Returns:
        The fetched secrets, keyed without prefix or suffix

    Raises:
        ActionError: Any failure; nothing is retried
    """
    if inputs is None:
        inputs = load_inputs(context)

    if client is None:
        client = InfisicalClient(inputs.domain, parse_headers(inputs.extra_headers))

    token = authenticate(client, inputs.method, inputs.credentials)
    context.set_secret(token)

    secrets = client.get_raw_secrets(
        token,
        env_slug=inputs.env_slug,
        project_slug=inputs.project_slug,
        secret_path=inputs.secret_path,
        include_imports=inputs.include_imports,
        recursive=inputs.recursive
    )

    context.debug(f"Exporting the following envs: {json.dumps(list(secrets.keys()))}")

    if inputs.export_type == "env":
        export_to_env(context, secrets, inputs.env_prefix, inputs.env_suffix)
    else:
        export_to_file(context, secrets, inputs, workspace)

    return secrets


def main(context: Optional[RunContext] = None) -> int:
    """Entry point of the main step; reports any failure as the step result."""
    bootstrap_logging(__name__)
    context = context or GitHubActionsContext()
    try:
        run_export(context)
    except Exception as e:
        logger.debug("Export failed", exc_info=True)
        context.set_failed(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
