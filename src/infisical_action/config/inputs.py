"""
Action input resolution.

Inputs are declared once in inputs.yaml (name, default, type, secrecy) and
read through the run context, so the same code serves the GitHub runner, the
local CLI and the tests.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..auth.dispatcher import Credentials
from ..exceptions import ConfigurationError
from ..runtime.context import RunContext

logger = logging.getLogger(__name__)

_inputs_manifest: Optional[List['InputDefinition']] = None


@dataclass
class InputDefinition:
    """Definition of an action input from the manifest."""
    name: str
    default: str = ""
    type: str = "string"
    secret: bool = False
    step: str = "main"
    description: str = ""


def load_inputs_manifest() -> List[InputDefinition]:
    """Load and cache the inputs manifest from YAML."""
    global _inputs_manifest
    if _inputs_manifest is not None:
        return _inputs_manifest

    manifest_path = Path(__file__).parent / "inputs.yaml"
    try:
        with open(manifest_path, 'r') as f:
            manifest_data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise RuntimeError(f"Failed to load inputs manifest from {manifest_path}: {e}") from e

    if not isinstance(manifest_data, dict) or 'inputs' not in manifest_data:
        raise RuntimeError(f"Invalid inputs manifest: missing 'inputs' key in {manifest_path}")

    _inputs_manifest = [
        InputDefinition(
            name=entry['name'],
            default=str(entry.get('default', '')),
            type=entry.get('type', 'string'),
            secret=entry.get('secret', False),
            step=entry.get('step', 'main'),
            description=entry.get('description', '')
        )
        for entry in manifest_data['inputs']
    ]
    logger.debug(f"Loaded {len(_inputs_manifest)} input definitions from manifest")
    return _inputs_manifest


def get_input_definition(name: str) -> InputDefinition:
    for definition in load_inputs_manifest():
        if definition.name == name:
            return definition
    raise KeyError(f"Input '{name}' is not defined in the inputs manifest")


def resolve_input(context: RunContext, name: str) -> Union[str, bool]:
    """Read one input through the context, applying its manifest default."""
    definition = get_input_definition(name)
    if definition.type == "boolean":
        if context.get_input(name):
            return context.get_boolean_input(name)
        return definition.default.lower() == "true"
    return context.get_input(name) or definition.default


class ActionInputs(BaseModel):
    """Resolved inputs of one run."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    method: str = Field(alias="method")
    client_id: str = Field(default="", alias="client-id")
    client_secret: str = Field(default="", alias="client-secret", repr=False)
    identity_id: str = Field(default="", alias="identity-id")
    oidc_audience: str = Field(default="", alias="oidc-audience")
    domain: str = Field(alias="domain")
    env_slug: str = Field(default="", alias="env-slug")
    project_slug: str = Field(default="", alias="project-slug")
    secret_path: str = Field(default="/", alias="secret-path")
    include_imports: bool = Field(default=True, alias="include-imports")
    recursive: bool = Field(default=False, alias="recursive")
    extra_headers: str = Field(default="", alias="extra-headers")
    export_type: Literal["env", "file"] = Field(default="env", alias="export-type")
    file_output_path: str = Field(default="/.env", alias="file-output-path")
    file_output_format: str = Field(default="dotenv", alias="file-output-format")
    env_prefix: str = Field(default="", alias="env-prefix")
    env_suffix: str = Field(default="", alias="env-suffix")

    @property
    def credentials(self) -> Credentials:
        return Credentials(
            client_id=self.client_id,
            client_secret=self.client_secret,
            identity_id=self.identity_id,
            oidc_audience=self.oidc_audience
        )


def load_inputs(context: RunContext) -> ActionInputs:
    """Resolve the main step's inputs through the context.

    Inputs read only by the post step (clean) are skipped. Secret inputs are
    masked as soon as they are read.

    Raises:
        ConfigurationError: If a boolean input is malformed or a value is invalid
    """
    values: Dict[str, Any] = {}
    for definition in load_inputs_manifest():
        if definition.step != "main":
            continue
        value = resolve_input(context, definition.name)
        if definition.secret and isinstance(value, str) and value:
            context.set_secret(value)
        values[definition.name] = value

    try:
        return ActionInputs.model_validate(values)
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error['loc'][0]) if error.get('loc') else None
        value = values.get(field, '') if field else ''
        raise ConfigurationError(f"Invalid {field} input '{value}': {error['msg']}", field=field) from e


def load_inputs_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read inputs for the local CLI from a YAML mapping.

    Keys may be written with hyphens (as in the workflow) or underscores.
    """
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Could not read inputs file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Inputs file {path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Inputs file {path} must contain a mapping of input names to values")

    return {str(key).replace('_', '-'): value for key, value in data.items()}
