"""
Run context: the capabilities the export needs from its host.

Provides a consistent interface whether the action runs inside a GitHub
Actions job, from the local CLI, or in tests.
"""
import logging
import os
import sys
import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional, TextIO, Tuple

from ..config.logging import mask_secret, mask_text
from ..exceptions import ConfigurationError, ExportError

logger = logging.getLogger(__name__)

TRUE_VALUES = ('true', 'True', 'TRUE')
FALSE_VALUES = ('false', 'False', 'FALSE')


def input_env_name(name: str) -> str:
    """Environment variable the runner uses for an action input."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


class RunContext(ABC):
    """Abstract base class for the host a run executes in."""

    @abstractmethod
    def get_input(self, name: str) -> str:
        """Return the raw value of an input, or an empty string."""
        pass

    def get_boolean_input(self, name: str) -> bool:
        """Return an input parsed with the YAML 1.2 core boolean spellings.

        Raises:
            ConfigurationError: If the value is not one of the accepted spellings
        """
        value = self.get_input(name)
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise ConfigurationError(
            f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
            "Support boolean input list: `true | True | TRUE | false | False | FALSE`",
            field=name
        )

    @abstractmethod
    def set_secret(self, value: str) -> None:
        """Mark a value as sensitive so every log sink redacts it."""
        pass

    @abstractmethod
    def export_variable(self, name: str, value: str) -> None:
        """Expose an environment variable to later steps of the run."""
        pass

    def export_variables(self, variables: Mapping[str, str]) -> None:
        """Expose several variables at once.

        Either every variable is exported or, when one of them cannot be,
        none is.

        Raises:
            ExportError: If a name or value cannot be exported
        """
        for name, value in variables.items():
            check_variable(name, value)
        for name, value in variables.items():
            self.export_variable(name, value)

    @abstractmethod
    def debug(self, message: str) -> None:
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def warning(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass

    @abstractmethod
    def set_failed(self, message: str) -> None:
        """Record the terminal failure of the run."""
        pass


def check_variable(name: str, value: str) -> None:
    """Reject a variable the process environment or an env file cannot hold.

    Raises:
        ExportError: If the name is empty or contains '=' or NUL, or the
            name or value is not encodable as UTF-8
    """
    try:
        name.encode('utf-8')
    except UnicodeEncodeError as e:
        raise ExportError(f"Invalid environment variable name: {name!r}") from e
    if not name or '=' in name or '\0' in name:
        raise ExportError(f"Invalid environment variable name: {name!r}")
    if '\0' in value:
        raise ExportError(f"Value of {name} contains a NUL character")
    try:
        value.encode('utf-8')
    except UnicodeEncodeError as e:
        raise ExportError(f"Value of {name} is not valid UTF-8: {e.reason}") from e


def _heredoc(name: str, value: str) -> str:
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ExportError(f"Unexpected input: name and value should not contain the delimiter \"{delimiter}\"")
    return f"{name}<<{delimiter}{os.linesep}{value}{os.linesep}{delimiter}{os.linesep}"


def _escape_data(value: str) -> str:
    return value.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(':', '%3A').replace(',', '%2C')


class GitHubActionsContext(RunContext):
    """Run context backed by the GitHub Actions runner.

    Inputs come from INPUT_* variables, messages are workflow commands on
    stdout and variables are appended to the GITHUB_ENV file.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None, stream: Optional[TextIO] = None):
        self.environ = os.environ if environ is None else environ
        self.stream = stream or sys.stdout
        self.exit_code = 0

    def _issue(self, command: str, message: str = '', properties: Optional[Dict[str, str]] = None) -> None:
        line = f"::{command}"
        if properties:
            line += ' ' + ','.join(f"{k}={_escape_property(v)}" for k, v in properties.items() if v)
        line += f"::{_escape_data(message)}"
        self.stream.write(line + os.linesep)
        self.stream.flush()

    def get_input(self, name: str) -> str:
        return self.environ.get(input_env_name(name), '').strip()

    def set_secret(self, value: str) -> None:
        if not value:
            return
        mask_secret(value)
        self._issue('add-mask', value)

    def export_variable(self, name: str, value: str) -> None:
        self.export_variables({name: value})

    def export_variables(self, variables: Mapping[str, str]) -> None:
        """Append every variable to GITHUB_ENV in a single write.

        All names and values are checked and encoded before the file is
        touched, so a failure leaves the file and os.environ unchanged.
        """
        for name, value in variables.items():
            check_variable(name, value)

        env_file = self.environ.get('GITHUB_ENV', '')
        if not env_file:
            for name, value in variables.items():
                self._issue('set-env', value, {'name': name})
            os.environ.update(variables)
            return

        block = ''.join(_heredoc(name, value) for name, value in variables.items())
        try:
            with open(env_file, 'ab') as f:
                f.write(block.encode('utf-8'))
        except OSError as e:
            raise ExportError(f"Failed to write {env_file}: {e}") from e
        os.environ.update(variables)
        logger.debug(f"Exported {len(variables)} variables to {env_file}")

    def debug(self, message: str) -> None:
        self._issue('debug', message)

    def info(self, message: str) -> None:
        self.stream.write(message + os.linesep)
        self.stream.flush()

    def warning(self, message: str) -> None:
        self._issue('warning', message)

    def error(self, message: str) -> None:
        self._issue('error', message)

    def set_failed(self, message: str) -> None:
        self.exit_code = 1
        self.error(message)


class ConsoleRunContext(RunContext):
    """Run context for the local CLI.

    Inputs come from an explicit mapping (CLI flags, YAML file) and then from
    INPUT_* variables. Exported variables are printed as shell export lines so
    the output can be eval'ed; every other message goes to stderr.
    """

    def __init__(self, inputs: Optional[Mapping[str, object]] = None,
                 stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None,
                 verbose: bool = False):
        self.inputs = {k: v for k, v in (inputs or {}).items() if v is not None}
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.verbose = verbose
        self.exit_code = 0

    def get_input(self, name: str) -> str:
        if name in self.inputs:
            value = self.inputs[name]
            if isinstance(value, bool):
                return 'true' if value else 'false'
            return str(value).strip()
        return os.environ.get(input_env_name(name), '').strip()

    def set_secret(self, value: str) -> None:
        mask_secret(value)

    def export_variable(self, name: str, value: str) -> None:
        self.export_variables({name: value})

    def export_variables(self, variables: Mapping[str, str]) -> None:
        from ..export.formats import ExportFormat, format_line

        for name, value in variables.items():
            check_variable(name, value)
        lines = [format_line(ExportFormat.SHELL, name, value) for name, value in variables.items()]
        self.stdout.write(''.join(f"{line}\n" for line in lines))

    def _emit(self, prefix: str, message: str) -> None:
        print(f"{prefix}{mask_text(message)}", file=self.stderr)

    def debug(self, message: str) -> None:
        if self.verbose:
            self._emit("🔍 ", message)

    def info(self, message: str) -> None:
        self._emit("", message)

    def warning(self, message: str) -> None:
        self._emit("⚠️  ", message)

    def error(self, message: str) -> None:
        self._emit("❌ ", message)

    def set_failed(self, message: str) -> None:
        self.exit_code = 1
        self.error(message)


class InMemoryRunContext(RunContext):
    """Run context that records everything, used by the test suite."""

    def __init__(self, inputs: Optional[Mapping[str, str]] = None):
        self.inputs = dict(inputs or {})
        self.secrets: List[str] = []
        self.variables: Dict[str, str] = {}
        self.messages: List[Tuple[str, str]] = []
        self.failure: Optional[str] = None

    def get_input(self, name: str) -> str:
        return str(self.inputs.get(name, '')).strip()

    def set_secret(self, value: str) -> None:
        self.secrets.append(value)

    def export_variable(self, name: str, value: str) -> None:
        self.variables[name] = value

    def debug(self, message: str) -> None:
        self.messages.append(('debug', message))

    def info(self, message: str) -> None:
        self.messages.append(('info', message))

    def warning(self, message: str) -> None:
        self.messages.append(('warning', message))

    def error(self, message: str) -> None:
        self.messages.append(('error', message))

    def set_failed(self, message: str) -> None:
        self.failure = message

    def messages_at(self, level: str) -> List[str]:
        return [m for lvl, m in self.messages if lvl == level]
