"""CliApp — Typer アプリケーション定義。

stdout にはレビュー文書（local）と check の結果のみを出力し、
ログとエラーメッセージは stderr に出力する。
"""

from __future__ import annotations

import importlib.metadata
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Annotated, Final

import typer

from forgereview.config import resolve_config
from forgereview.engine import run_review
from forgereview.engine._generator import split_command
from forgereview.errors import (
    ConfigurationError,
    ForgeReviewError,
    UnsupportedPlatformError,
)
from forgereview.models.config import ForgeReviewConfig
from forgereview.models.exit_code import ExitCode
from forgereview.models.platform import Platform
from forgereview.platforms import load_credentials

_OVERRIDES_KEY: Final[str] = "_config_overrides"

_LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
_PACKAGE_LOGGER: Final[str] = "forgereview"

app = typer.Typer(
    name="forgereview",
    help=(
        "Automated pull request code review for GitHub, Bitbucket and local runs.\n\n"
        "Without a subcommand, fetches the diff for the current platform, runs the "
        "review command on it and posts (or prints) the result."
    ),
    add_completion=False,
    invoke_without_command=True,
)


def main() -> None:
    """CLI エントリポイント。pyproject.toml の [project.scripts] から呼び出される。"""
    app()


def _version_callback(value: bool) -> None:
    """--version 指定時にバージョン番号を出力して終了する。"""
    if value:
        print(importlib.metadata.version("forgereview"))
        raise typer.Exit()


def configure_logging(debug: bool) -> None:
    """forgereview ロガーに stderr ハンドラを設定する。

    再呼び出し時は既存ハンドラを置き換える。
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False


def _build_config_overrides(
    *,
    platform: str | None,
    review_command: str | None,
    review_args: str | None,
    output_file: Path | None,
    max_comment_length: int | None,
    base_branch: str | None,
    debug: bool | None,
) -> dict[str, object]:
    """CLI オプションから config_overrides 辞書を構築する。None 値は未指定として除外する。"""
    raw: dict[str, object] = {
        "platform": platform,
        "review_command": review_command,
        "review_args": review_args,
        "output_file": output_file,
        "max_comment_length": max_comment_length,
        "base_branch": base_branch,
        "debug": debug,
    }
    return {k: v for k, v in raw.items() if v is not None}


def _load_config(overrides: dict[str, object]) -> ForgeReviewConfig:
    """設定を解決する。失敗時はエラーを stderr に出力して INPUT_ERROR で終了する。"""
    try:
        return resolve_config(cli_overrides=overrides)
    except (ConfigurationError, UnsupportedPlatformError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None


@app.callback()
def review_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
    platform: Annotated[
        str | None,
        typer.Option(
            "--platform", help="Execution platform: github, bitbucket or local."
        ),
    ] = None,
    review_command: Annotated[
        str | None,
        typer.Option("--review-command", help="Command that generates the review."),
    ] = None,
    review_args: Annotated[
        str | None,
        typer.Option("--review-args", help="Extra arguments for the review command."),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output-file", help="Path of the review artifact file."),
    ] = None,
    max_comment_length: Annotated[
        int | None,
        typer.Option(
            "--max-comment-length",
            help="Maximum comment length before truncation (positive integer).",
            min=1,
        ),
    ] = None,
    base_branch: Annotated[
        str | None,
        typer.Option("--base-branch", help="Base branch for local diffs."),
    ] = None,
    debug: Annotated[
        bool | None,
        typer.Option("--debug/--no-debug", help="Enable diagnostic logging."),
    ] = None,
) -> None:
    """Run an automated code review (default command)."""
    overrides = _build_config_overrides(
        platform=platform,
        review_command=review_command,
        review_args=review_args,
        output_file=output_file,
        max_comment_length=max_comment_length,
        base_branch=base_branch,
        debug=debug,
    )
    obj = ctx.ensure_object(dict)
    obj[_OVERRIDES_KEY] = overrides

    if ctx.invoked_subcommand is not None:
        return

    config = _load_config(overrides)
    configure_logging(config.debug)

    try:
        result = run_review(config)
    except (ConfigurationError, UnsupportedPlatformError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None
    except ForgeReviewError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(code=ExitCode.EXECUTION_ERROR) from None
    except (KeyboardInterrupt, SystemExit):
        raise
    except Exception as e:
        print(
            f"Error: Unexpected failure during review: {type(e).__name__}: {e}\n"
            "Re-run with --debug for diagnostic output.",
            file=sys.stderr,
        )
        raise typer.Exit(code=ExitCode.EXECUTION_ERROR) from e

    if result.document.truncated:
        print(
            "Warning: Review exceeded the maximum comment length and was truncated.",
            file=sys.stderr,
        )
    raise typer.Exit(code=ExitCode.SUCCESS)


# --- check サブコマンド ---

_CHECK_LABEL_WIDTH: Final[int] = 17


def _check_line(label: str, value: str) -> None:
    print(f"{label + ':':<{_CHECK_LABEL_WIDTH}}{value}")


@app.command()
def check(ctx: typer.Context) -> None:
    """Check that credentials and required tools are available (no network calls)."""
    obj = ctx.ensure_object(dict)
    config = _load_config(obj.get(_OVERRIDES_KEY, {}))

    problems: list[str] = []
    _check_line("Platform", config.platform.value)

    if config.platform is Platform.LOCAL:
        _check_line("Credentials", "not required")
    else:
        try:
            load_credentials(config.platform, os.environ)
        except ConfigurationError as e:
            _check_line("Credentials", "missing")
            problems.append(str(e))
        else:
            _check_line("Credentials", "ok")

    git_path = shutil.which("git")
    _check_line("git", git_path or "not found")
    if config.platform is Platform.LOCAL and git_path is None:
        problems.append("git is required for local mode but was not found in PATH")

    try:
        executable = split_command(config.review_command)[0]
    except (ConfigurationError, IndexError):
        executable = config.review_command
        problems.append(f"Invalid review command: '{config.review_command}'")
        _check_line("Review command", "invalid")
    else:
        command_path = shutil.which(executable)
        _check_line("Review command", f"{executable} ({command_path or 'not found'})")
        if command_path is None:
            problems.append(f"Review command '{executable}' was not found in PATH")

    _check_line("Output file", str(config.output_file))

    for problem in problems:
        print(f"Error: {problem}", file=sys.stderr)
    if problems:
        raise typer.Exit(code=ExitCode.INPUT_ERROR)
