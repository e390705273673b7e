"""Tests for output path validation and resolution."""

import pytest

from infisical_action.export.paths import (
    recommended_extension,
    resolve_output_path,
    validate_output_path,
)


class TestValidateOutputPath:
    """Extension advice never changes the path."""

    def test_mismatch_warns_with_recommendation(self):
        result = validate_output_path("out.txt", "terraform")

        assert result.path == "out.txt"
        assert result.warning == (
            "Warning: Format is 'terraform' but file extension is not '.tfvars'. Recommended: out.tfvars"
        )

    def test_match_has_no_warning(self):
        result = validate_output_path("out.tfvars", "terraform")

        assert result.path == "out.tfvars"
        assert result.warning is None

    @pytest.mark.parametrize("fmt, extension", [
        ("terraform", ".tfvars"),
        ("shell", ".sh"),
        ("raw", ".env"),
        ("dotenv", ".env"),
        ("dotenv-safe", ".env"),
        ("xml", ".env"),
        ("SHELL", ".sh"),
    ])
    def test_recommended_extensions(self, fmt, extension):
        assert recommended_extension(fmt) == extension

    def test_only_last_extension_is_replaced(self):
        result = validate_output_path("/config/secrets.prod.env", "shell")
        assert result.warning.endswith("Recommended: /config/secrets.prod.sh")

    def test_dot_in_directory_is_not_an_extension(self):
        result = validate_output_path("/my.dir/secrets", "shell")

        assert result.path == "/my.dir/secrets"
        assert result.warning.endswith("Recommended: /my.dir/secrets.sh")

    def test_default_output_path(self):
        assert validate_output_path("/.env", "dotenv").warning is None

    def test_format_named_as_given(self):
        result = validate_output_path("/.env", "Terraform")
        assert "Format is 'Terraform'" in result.warning


class TestResolveOutputPath:
    """The file-output-path input is relative to the workspace."""

    def test_leading_slash_is_workspace_relative(self, tmp_path):
        assert resolve_output_path("/.env", tmp_path) == tmp_path / ".env"

    def test_without_leading_slash(self, tmp_path):
        assert resolve_output_path("config/app.env", tmp_path) == tmp_path / "config" / "app.env"

    def test_uses_github_workspace(self, workspace):
        assert resolve_output_path("/out.sh") == workspace / "out.sh"

    def test_falls_back_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.delenv("GITHUB_WORKSPACE", raising=False)
        monkeypatch.chdir(tmp_path)

        assert resolve_output_path("/.env").resolve() == (tmp_path / ".env").resolve()
