"""ReviewGenerator — 外部レビュー生成コマンドの呼び出し。

コマンドのバージョンによって受け付ける入力形式が異なるため、
次の 2 形式を順に試す。リトライではなく入力形式の互換対応である。

1. stdin 形式: ``<command> <args...>`` に依頼文を標準入力で渡す。
2. 引数形式: ``<command> <依頼文> <args...>`` として直接引数で渡す。

stdout をレビュー結果として採用し、stderr は破棄する（DEBUG ログのみ）。
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

from forgereview.errors import ConfigurationError, EmptyReviewError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvocationAttempt:
    """1 回の呼び出し結果。

    Attributes:
        shape: 呼び出し形式（"stdin" / "argument"）。
        output: stdout の内容。失敗時は空文字列。
        failure: 失敗理由。成功時は None。
    """

    shape: str
    output: str
    failure: str | None = None

    @property
    def usable(self) -> bool:
        return self.failure is None and bool(self.output.strip())


def split_command(command: str, option_name: str = "review_command") -> list[str]:
    """シェル風の文字列を引数リストに分割する。

    Raises:
        ConfigurationError: クォートの対応が取れていない場合。
    """
    try:
        return shlex.split(command)
    except ValueError as e:
        raise ConfigurationError(f"Invalid {option_name} '{command}': {e}") from e


class ReviewGenerator:
    """外部レビュー生成コマンドのラッパー。

    タイムアウトは設定しない。ハングした実行は外部から停止する必要がある。
    """

    def __init__(self, command: Sequence[str], extra_args: Sequence[str] = ()) -> None:
        if not command:
            raise ConfigurationError("review_command must not be empty")
        self._command = tuple(command)
        self._extra_args = tuple(extra_args)

    @classmethod
    def from_strings(cls, command: str, extra_args: str = "") -> ReviewGenerator:
        """設定値の文字列（例: "gh copilot explain"）から構築する。"""
        return cls(
            split_command(command),
            split_command(extra_args, option_name="review_args"),
        )

    @property
    def display_command(self) -> str:
        return shlex.join([*self._command, *self._extra_args])

    def _invoke(self, shape: str, argv: list[str], stdin: str | None) -> InvocationAttempt:
        try:
            result = subprocess.run(
                argv,
                input=stdin,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            logger.debug("Review command (%s) could not be started: %s", shape, exc)
            return InvocationAttempt(shape=shape, output="", failure=str(exc))

        if result.stderr:
            logger.debug("Review command (%s) stderr: %s", shape, result.stderr.strip())
        if result.returncode != 0:
            return InvocationAttempt(
                shape=shape,
                output="",
                failure=f"exit status {result.returncode}",
            )
        return InvocationAttempt(shape=shape, output=result.stdout)

    def generate(self, request: str) -> str:
        """レビュー依頼文をコマンドに渡し、レビュー結果を返す。

        Args:
            request: build_review_request() で構築した依頼文。

        Returns:
            コマンドの stdout（レビュー本文）。

        Raises:
            EmptyReviewError: 2 形式いずれの呼び出しでも出力が得られなかった場合。
        """
        logger.info("Running code review with: %s", self.display_command)

        piped = self._invoke(
            "stdin", [*self._command, *self._extra_args], stdin=request
        )
        if piped.usable:
            return piped.output

        logger.debug(
            "Piped invocation produced no review (%s); retrying with argument",
            piped.failure or "empty output",
        )
        direct = self._invoke(
            "argument", [*self._command, request, *self._extra_args], stdin=None
        )
        if direct.usable:
            return direct.output

        reasons = ", ".join(
            f"{a.shape}: {a.failure or 'empty output'}" for a in (piped, direct)
        )
        raise EmptyReviewError(
            f"Review command produced no output ({reasons}). "
            f"Check that '{self._command[0]}' is installed and authenticated."
        )
