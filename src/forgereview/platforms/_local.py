"""LocalPlatform — ローカル作業ツリーの diff 取得と stdout への表示。"""

from __future__ import annotations

import logging
import subprocess
from typing import Final

from forgereview.errors import ConfigurationError, LocalDiffError
from forgereview.models.delivery import DeliveryDocument
from forgereview.models.platform import Platform

logger = logging.getLogger(__name__)

FALLBACK_BASE_BRANCH: Final[str] = "main"
"""リモートのデフォルトブランチを解決できない場合のベースブランチ。"""

_ORIGIN_HEAD_REF: Final[str] = "refs/remotes/origin/HEAD"
_ORIGIN_REF_PREFIX: Final[str] = "refs/remotes/origin/"

_GIT_TIMEOUT_SECONDS: Final[int] = 120
"""git コマンドのタイムアウト秒数。"""


class GitCommandError(Exception):
    """git コマンドの失敗。未インストール・タイムアウトを含む。"""


def _run_git_command(args: list[str]) -> str:
    """git コマンドを実行し、stdout を返す共通ヘルパー。

    Args:
        args: git サブコマンドと引数のリスト（例: ``["diff", "main...HEAD"]``）。

    Returns:
        コマンドの stdout。

    Raises:
        GitCommandError: git コマンド失敗・未インストール・タイムアウト時。
    """
    cmd = ["git", *args]
    cmd_str = " ".join(cmd)
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
    except FileNotFoundError:
        raise GitCommandError(
            "git command not found. Ensure git is installed and available in PATH."
        ) from None
    except subprocess.TimeoutExpired as exc:
        raise GitCommandError(
            f"{cmd_str} timed out after {_GIT_TIMEOUT_SECONDS}s."
        ) from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise GitCommandError(f"{cmd_str} failed: {stderr}") from exc
    return result.stdout


def resolve_default_branch() -> str | None:
    """origin のデフォルトブランチ名を取得する。

    ``git symbolic-ref refs/remotes/origin/HEAD`` の結果から
    ``refs/remotes/origin/`` を除去した名前を返す。解決できない場合は None。
    """
    try:
        ref = _run_git_command(["symbolic-ref", _ORIGIN_HEAD_REF]).strip()
    except GitCommandError as exc:
        logger.debug("Could not resolve origin default branch: %s", exc)
        return None
    branch = ref.removeprefix(_ORIGIN_REF_PREFIX)
    return branch or None


def resolve_base_branch(override: str | None) -> str:
    """diff のベースブランチを決定する。

    優先順: 明示指定 → origin のデフォルトブランチ → "main"。

    Raises:
        ConfigurationError: 明示指定が "-" で始まる場合（git のオプションと衝突する）。
    """
    if override:
        if override.startswith("-"):
            raise ConfigurationError(
                f"Invalid base branch '{override}': must not start with '-'"
            )
        return override
    return resolve_default_branch() or FALLBACK_BASE_BRANCH


class LocalPlatform:
    """開発者のローカル実行向けプラットフォーム実装。

    リモート API は使わず、レビュー文書は stdout に表示する。
    """

    def __init__(self, base_branch: str | None = None) -> None:
        self._base_branch = base_branch

    @property
    def platform(self) -> Platform:
        return Platform.LOCAL

    def fetch_diff(self) -> str:
        """ベースブランチと HEAD の three-dot diff を取得する。

        Raises:
            LocalDiffError: git diff が失敗した場合（Git リポジトリ外、
                ベースブランチ不明、git 未インストール等）。
            ConfigurationError: ベースブランチ指定が不正な場合。
        """
        logger.info("Generating diff locally")
        base = resolve_base_branch(self._base_branch)
        logger.debug("Base branch: %s", base)
        try:
            return _run_git_command(["diff", f"{base}...HEAD"])
        except GitCommandError as exc:
            raise LocalDiffError(
                f"Failed to compute local diff against '{base}': {exc}\n"
                "Run inside a Git working tree, or set BASE_BRANCH / --base-branch "
                "to an existing branch."
            ) from exc

    def post_comment(self, document: DeliveryDocument) -> None:
        """レビュー文書を stdout に書き出す。失敗しない。"""
        logger.info("Review output (local mode - not posting):")
        print(document.text)
