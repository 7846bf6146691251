"""設定ソースのローダー。

TOML ファイルと環境変数を設定辞書に変換する。バリデーションは _resolver.py が担当する。
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Final

_TOOL_SECTION_KEY: str = "tool"
_FORGEREVIEW_SECTION_KEY: str = "forgereview"

ENV_CONFIG_KEYS: Final[Mapping[str, str]] = {
    "PLATFORM": "platform",
    "REVIEW_COMMAND": "review_command",
    "REVIEW_ARGS": "review_args",
    "OUTPUT_FILE": "output_file",
    "MAX_COMMENT_LENGTH": "max_comment_length",
    "BASE_BRANCH": "base_branch",
    "DEBUG": "debug",
    "GITHUB_API_URL": "github_api_url",
    "BITBUCKET_API_URL": "bitbucket_api_url",
}
"""環境変数名 → 設定キーの対応表。"""

_TRUTHY_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


def load_toml_config(path: Path) -> dict[str, object]:
    """TOML 設定ファイルを読み込み辞書として返す。

    Raises:
        tomllib.TOMLDecodeError: TOML 構文エラーの場合。
        PermissionError: 読み取り権限がない場合。
        FileNotFoundError: ファイルが存在しない場合。
    """
    with path.open("rb") as f:
        return tomllib.load(f)


def load_pyproject_config(path: Path) -> dict[str, object] | None:
    """pyproject.toml から [tool.forgereview] セクションを読み込む。

    Args:
        path: pyproject.toml のパス。

    Returns:
        [tool.forgereview] セクションの辞書。セクションが存在しなければ None。

    Raises:
        tomllib.TOMLDecodeError: TOML 構文エラーの場合。
        FileNotFoundError: ファイルが存在しない場合。
        PermissionError: 読み取り権限がない場合。
    """
    with path.open("rb") as f:
        data = tomllib.load(f)
    tool = data.get(_TOOL_SECTION_KEY)
    if not isinstance(tool, dict):
        return None
    section = tool.get(_FORGEREVIEW_SECTION_KEY)
    if not isinstance(section, dict):
        return None
    return section


def load_env_config(environ: Mapping[str, str]) -> dict[str, object]:
    """環境変数から設定辞書を構築する。

    空文字列の環境変数は未設定として扱う。
    DEBUG は "true" / "1" / "yes" / "on"（大文字小文字非依存）のみ True。

    Args:
        environ: 環境変数のマッピング（通常は os.environ）。

    Returns:
        設定キーをキーとする辞書。
    """
    result: dict[str, object] = {}
    for env_name, key in ENV_CONFIG_KEYS.items():
        value = environ.get(env_name, "")
        if not value:
            continue
        if key == "debug":
            result[key] = value.strip().lower() in _TRUTHY_VALUES
        else:
            result[key] = value
    return result
