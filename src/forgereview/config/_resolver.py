"""設定リゾルバー。

優先順位（低 → 高）:
デフォルト値 < ~/.config/forgereview/config.toml < pyproject.toml [tool.forgereview]
< .forgereview/config.toml < 環境変数 < CLI オプション

local 以外のプラットフォームでは、リポジトリ内の設定ファイル（pyproject.toml と
.forgereview/config.toml）からレビューコマンドと出力先を読み込まない。
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from forgereview.config._loader import (
    load_env_config,
    load_pyproject_config,
    load_toml_config,
)
from forgereview.config._locator import (
    find_config_file,
    find_pyproject_toml,
    get_user_config_path,
)
from forgereview.errors import ConfigurationError
from forgereview.models.config import ForgeReviewConfig
from forgereview.models.platform import Platform
from forgereview.platforms import resolve_platform

logger = logging.getLogger(__name__)

_PLATFORM_KEY: str = "platform"

REPO_UNTRUSTED_KEYS: Final[frozenset[str]] = frozenset(
    {"review_command", "review_args", "output_file"}
)
"""リモートプラットフォームではリポジトリ内の設定ファイルから受け付けないキー。

CI ではカレントディレクトリがレビュー対象の PR のチェックアウトであり、
レビューコマンドは認証トークンを含む環境で実行される。
"""


def merge_config_layers(
    *layers: Mapping[str, object] | None,
) -> dict[str, object]:
    """複数の設定レイヤーを項目単位でマージする。

    後のレイヤーが先のレイヤーを上書きする。None のレイヤーはスキップされる。

    Args:
        layers: マージ対象の設定辞書。低優先度から高優先度の順。

    Returns:
        マージ済みの設定辞書。
    """
    result: dict[str, object] = {}
    for layer in layers:
        if layer is None:
            continue
        result.update(layer)
    return result


def filter_cli_overrides(cli_options: Mapping[str, object]) -> dict[str, object]:
    """CLI オプション辞書から None 値（未指定）を除外する。"""
    return {k: v for k, v in cli_options.items() if v is not None}


def _load_user_layer() -> dict[str, object] | None:
    try:
        path = get_user_config_path()
    except RuntimeError as e:
        logger.debug("Skipping user configuration: %s", e)
        return None
    try:
        return load_toml_config(path)
    except FileNotFoundError:
        return None


def _load_repo_layers(start_dir: Path) -> list[dict[str, object] | None]:
    """リポジトリ内の設定ファイル（pyproject.toml, .forgereview/config.toml）を読む。"""
    pyproject_layer: dict[str, object] | None = None
    pyproject_path = find_pyproject_toml(start_dir)
    if pyproject_path is not None:
        pyproject_layer = load_pyproject_config(pyproject_path)

    project_layer: dict[str, object] | None = None
    config_path = find_config_file(start_dir)
    if config_path is not None:
        # .forgereview/ はあるが config.toml が未作成のケース
        try:
            project_layer = load_toml_config(config_path)
        except FileNotFoundError:
            pass

    return [pyproject_layer, project_layer]


def _drop_untrusted_keys(
    layer: Mapping[str, object] | None,
) -> dict[str, object] | None:
    if layer is None:
        return None
    ignored = sorted(REPO_UNTRUSTED_KEYS.intersection(layer))
    if ignored:
        logger.warning(
            "Ignoring %s from repository configuration on a remote platform; "
            "set them through environment variables or CLI options",
            ", ".join(ignored),
        )
    return {k: v for k, v in layer.items() if k not in REPO_UNTRUSTED_KEYS}


def resolve_config(
    start_dir: Path | None = None,
    cli_overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ForgeReviewConfig:
    """全設定ソースを解決し ForgeReviewConfig を構築する。

    プラットフォーム指定は他の値より先に検証され、
    サポート外の値は UnsupportedPlatformError として報告される。
    解決したプラットフォームが local 以外の場合、リポジトリ内の設定ファイルの
    REPO_UNTRUSTED_KEYS は無視される。

    Args:
        start_dir: 設定ファイル探索の開始ディレクトリ。None の場合はカレントディレクトリ。
        cli_overrides: CLI オプションの辞書。None 値は未指定扱い。
        environ: 環境変数のマッピング。None の場合は os.environ。

    Returns:
        解決済みの ForgeReviewConfig インスタンス。

    Raises:
        ConfigurationError: 設定ファイルが読めない、またはマージ後の値が不正な場合。
        UnsupportedPlatformError: プラットフォーム指定がサポート外の場合。
    """
    effective_start = start_dir if start_dir is not None else Path.cwd()
    effective_env = environ if environ is not None else os.environ

    try:
        user_layer = _load_user_layer()
        repo_layers = _load_repo_layers(effective_start)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid configuration file syntax: {e}. "
            "Check .forgereview/config.toml and [tool.forgereview] in pyproject.toml."
        ) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file: {e}") from e

    env_layer = load_env_config(effective_env)
    cli_layer = filter_cli_overrides(cli_overrides) if cli_overrides else None

    merged = merge_config_layers(user_layer, *repo_layers, env_layer, cli_layer)

    raw_platform = merged.get(_PLATFORM_KEY)
    platform = resolve_platform(None if raw_platform is None else str(raw_platform))
    if platform is not Platform.LOCAL:
        trusted_repo_layers = [_drop_untrusted_keys(layer) for layer in repo_layers]
        merged = merge_config_layers(
            user_layer, *trusted_repo_layers, env_layer, cli_layer
        )
    merged[_PLATFORM_KEY] = platform

    try:
        config = ForgeReviewConfig(**merged)  # type: ignore[arg-type]
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    logger.debug("Resolved configuration: %s", config)
    return config
