"""Local CLI tasks.

Run the same export and cleanup steps as the action from a terminal. Inputs
come from flags, an optional YAML file and INPUT_* environment variables, in
that order; credentials should be supplied through the latter two.
"""

import sys
from invoke import task
from infisical_action.exceptions import ActionError


def _handle_action_error(e: ActionError):
    """Print built-in guidance and exit."""
    print(e.guidance, file=sys.stderr)
    sys.exit(1)


def _build_context(config, overrides, debug):
    from infisical_action.config.inputs import load_inputs_file
    from infisical_action.config.logging import bootstrap_logging
    from infisical_action.runtime import ConsoleRunContext

    if debug:
        import os
        os.environ['LOG_LEVEL'] = 'DEBUG'
    bootstrap_logging()

    inputs = load_inputs_file(config) if config else {}
    inputs.update({k: v for k, v in overrides.items() if v is not None})
    return ConsoleRunContext(inputs, verbose=debug)


@task(help={
    'config': 'YAML file mapping input names to values',
    'method': 'Authentication method: universal, oidc or aws-iam',
    'domain': 'Base URL of the Infisical server',
    'project_slug': 'Project slug to fetch secrets from',
    'env_slug': 'Environment slug to fetch secrets from',
    'secret_path': 'Folder path of the secrets (default: /)',
    'export_type': 'env prints export lines to stdout, file writes a file',
    'file_output_path': 'Output file when --export-type=file',
    'file_output_format': 'terraform, raw, shell, dotenv or dotenv-safe',
    'env_prefix': 'Prefix added to every key',
    'env_suffix': 'Suffix added to every key',
    'recursive': 'Fetch secrets from sub-folders as well',
    'debug': 'Enable debug logging (sets LOG_LEVEL=DEBUG)'
})
def export(ctx, config=None, method=None, domain=None, project_slug=None, env_slug=None,
           secret_path=None, export_type=None, file_output_path=None, file_output_format=None,
           env_prefix=None, env_suffix=None, recursive=None, debug=False):
    """
    Fetch secrets and export them as shell variables or a file.

    Examples:
        eval "$(invoke export --project-slug=web --env-slug=dev)"
        invoke export --config=infisical.yaml --export-type=file --file-output-path=/.env
        env "INPUT_CLIENT-ID=..." "INPUT_CLIENT-SECRET=..." invoke export --project-slug=web --env-slug=prod
    """
    from infisical_action.config.inputs import load_inputs
    from infisical_action.main import run_export

    overrides = {
        'method': method,
        'domain': domain,
        'project-slug': project_slug,
        'env-slug': env_slug,
        'secret-path': secret_path,
        'export-type': export_type,
        'file-output-path': file_output_path,
        'file-output-format': file_output_format,
        'env-prefix': env_prefix,
        'env-suffix': env_suffix,
        'recursive': recursive,
    }

    try:
        context = _build_context(config, overrides, debug)
        inputs = load_inputs(context)
        run_export(context, inputs)
    except ActionError as e:
        _handle_action_error(e)


@task(help={
    'config': 'YAML file mapping input names to values',
    'file_output_path': 'File written by a previous export',
    'debug': 'Enable debug logging (sets LOG_LEVEL=DEBUG)'
})
def cleanup(ctx, config=None, file_output_path=None, debug=False):
    """
    Delete a file written by `invoke export --export-type=file`.

    Examples:
        invoke cleanup --file-output-path=/.env
    """
    from infisical_action.post import run_cleanup

    try:
        context = _build_context(config, {'file-output-path': file_output_path, 'clean': True}, debug)
        run_cleanup(context)
    except ActionError as e:
        _handle_action_error(e)
