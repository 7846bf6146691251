"""設定ローダーのテスト。"""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from forgereview.config._loader import (
    load_env_config,
    load_pyproject_config,
    load_toml_config,
)


class TestLoadTomlConfig:
    """load_toml_config のテスト。"""

    def test_reads_values(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('platform = "github"\nmax_comment_length = 1000\n')
        assert load_toml_config(path) == {
            "platform": "github",
            "max_comment_length": 1000,
        }

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_toml_config(tmp_path / "missing.toml")

    def test_syntax_error_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("platform = \n")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml_config(path)


class TestLoadPyprojectConfig:
    """load_pyproject_config のテスト。"""

    def test_reads_tool_section(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool.forgereview]\nreview_command = "llm review"\n')
        assert load_pyproject_config(path) == {"review_command": "llm review"}

    def test_returns_none_without_section(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')
        assert load_pyproject_config(path) is None

    def test_returns_none_without_forgereview_section(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.ruff]\nline-length = 88\n")
        assert load_pyproject_config(path) is None


class TestLoadEnvConfig:
    """load_env_config のテスト。"""

    def test_maps_known_variables(self) -> None:
        environ = {
            "PLATFORM": "bitbucket",
            "REVIEW_COMMAND": "llm -m gpt",
            "REVIEW_ARGS": "--quiet",
            "OUTPUT_FILE": "/tmp/out.md",
            "MAX_COMMENT_LENGTH": "500",
            "BASE_BRANCH": "develop",
            "GITHUB_API_URL": "https://ghe.example.com/api/v3",
            "BITBUCKET_API_URL": "https://bb.example.com/2.0",
        }
        assert load_env_config(environ) == {
            "platform": "bitbucket",
            "review_command": "llm -m gpt",
            "review_args": "--quiet",
            "output_file": "/tmp/out.md",
            "max_comment_length": "500",
            "base_branch": "develop",
            "github_api_url": "https://ghe.example.com/api/v3",
            "bitbucket_api_url": "https://bb.example.com/2.0",
        }

    def test_ignores_unrelated_variables(self) -> None:
        assert load_env_config({"HOME": "/root", "GITHUB_TOKEN": "t"}) == {}

    def test_empty_values_are_unset(self) -> None:
        assert load_env_config({"PLATFORM": "", "BASE_BRANCH": ""}) == {}

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "on"])
    def test_debug_truthy(self, value: str) -> None:
        assert load_env_config({"DEBUG": value}) == {"debug": True}

    @pytest.mark.parametrize("value", ["false", "0", "no", "anything"])
    def test_debug_falsy(self, value: str) -> None:
        assert load_env_config({"DEBUG": value}) == {"debug": False}
