"""設定ファイルの探索。

プロジェクト設定（.forgereview/config.toml）と pyproject.toml は
カレントディレクトリから親方向へ遡って探す。ユーザー設定は固定パス。
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Final

PROJECT_DIR_NAME: Final[str] = ".forgereview"
CONFIG_FILE_NAME: Final[str] = "config.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"


def _walk_up(start: Path) -> Iterator[Path]:
    """start 自身からファイルシステムルートまでのディレクトリを順に返す。"""
    current = start.resolve()
    yield current
    yield from current.parents


def find_project_root(start: Path) -> Path | None:
    """.forgereview/ ディレクトリを含む最も近い祖先ディレクトリを返す。

    同名のファイルはプロジェクトルートの目印とみなさない。
    """
    for directory in _walk_up(start):
        if (directory / PROJECT_DIR_NAME).is_dir():
            return directory
    return None


def find_config_file(start: Path) -> Path | None:
    """.forgereview/config.toml のパスを返す。

    ファイルの存在は確認しない。プロジェクトルートがなければ None。
    """
    root = find_project_root(start)
    if root is None:
        return None
    return root / PROJECT_DIR_NAME / CONFIG_FILE_NAME


def find_pyproject_toml(start: Path) -> Path | None:
    for directory in _walk_up(start):
        candidate = directory / PYPROJECT_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def get_user_config_path() -> Path:
    """ユーザー設定 ~/.config/forgereview/config.toml のパス。

    Raises:
        RuntimeError: ホームディレクトリを特定できない場合。
    """
    return Path.home() / ".config" / "forgereview" / CONFIG_FILE_NAME
