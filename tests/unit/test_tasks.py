"""Tests for the invoke CLI tasks."""

import shlex

import pytest
from invoke import Context

from infisical_action import namespace
from infisical_action.tasks import cleanup, export
from .fakes import FakeInfisicalClient


@pytest.fixture
def cli_env(clean_input_env, workspace):
    clean_input_env.setenv("INPUT_CLIENT-ID", "id")
    clean_input_env.setenv("INPUT_CLIENT-SECRET", "secret")
    return workspace


class TestNamespace:
    def test_tasks_registered(self):
        assert set(namespace.tasks) == {"export", "cleanup"}


class TestExportTask:
    """invoke export."""

    def test_prints_eval_friendly_exports(self, cli_env, monkeypatch, capsys):
        client = FakeInfisicalClient(secrets={"API_KEY": "it's"})
        monkeypatch.setattr("infisical_action.main.InfisicalClient", lambda *args, **kwargs: client)

        export(Context(), project_slug="web", env_slug="dev", env_prefix="APP_")

        out = capsys.readouterr().out
        assert shlex.split(out) == ["export", "APP_API_KEY=it's"]
        assert client.calls[1][2]['project_slug'] == "web"

    def test_config_file_and_flags(self, cli_env, monkeypatch, tmp_path):
        config = tmp_path / "infisical.yaml"
        config.write_text("project_slug: web\nenv_slug: staging\nfile_output_format: shell\n")
        client = FakeInfisicalClient(secrets={"A": "1"})
        monkeypatch.setattr("infisical_action.main.InfisicalClient", lambda *args, **kwargs: client)

        export(Context(), config=str(config), env_slug="dev", export_type="file", file_output_path="/out.sh")

        assert (cli_env / "out.sh").read_text() == "export A='1'"
        assert client.calls[1][2]['env_slug'] == "dev"

    def test_configuration_error_exits_with_guidance(self, cli_env, capsys):
        with pytest.raises(SystemExit) as exc:
            export(Context(), method="ldap")

        assert exc.value.code == 1
        err = capsys.readouterr().err
        assert "Invalid authentication method: ldap" in err
        assert "INPUT_METHOD" in err


class TestCleanupTask:
    """invoke cleanup."""

    def test_removes_file(self, cli_env):
        (cli_env / "out.env").write_text("A=1")

        cleanup(Context(), file_output_path="/out.env")

        assert not (cli_env / "out.env").exists()

    def test_missing_file_is_fine(self, cli_env):
        cleanup(Context(), file_output_path="/never-written.env")
