"""PlatformResolver — プラットフォーム判定と認証情報の事前検証。

ネットワーク・ファイルシステムへの副作用を持たない。
diff 取得より前に実行し、認証情報の欠落を部分的な処理の前に報告する。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

import requests
from pydantic import ValidationError

from forgereview.errors import ConfigurationError, UnsupportedPlatformError
from forgereview.models._base import normalize_enum_value
from forgereview.models.config import ForgeReviewConfig
from forgereview.models.platform import (
    BitbucketCredentials,
    Credentials,
    GitHubCredentials,
    Platform,
)
from forgereview.platforms._base import ReviewPlatform
from forgereview.platforms._bitbucket import BitbucketPlatform
from forgereview.platforms._github import GitHubPlatform
from forgereview.platforms._local import LocalPlatform

GITHUB_ENV_FIELDS: Final[Mapping[str, str]] = {
    "GITHUB_TOKEN": "token",
    "GITHUB_REPOSITORY": "repository",
    "PR_NUMBER": "pr_number",
}
"""GitHub 用の必須環境変数 → GitHubCredentials フィールド。"""

BITBUCKET_ENV_FIELDS: Final[Mapping[str, str]] = {
    "BITBUCKET_TOKEN": "token",
    "BITBUCKET_WORKSPACE": "workspace",
    "BITBUCKET_REPO_SLUG": "repo_slug",
    "PR_NUMBER": "pr_number",
}
"""Bitbucket 用の必須環境変数 → BitbucketCredentials フィールド。"""

_ENV_FALLBACKS: Final[Mapping[Platform, Mapping[str, str]]] = {
    Platform.BITBUCKET: {"PR_NUMBER": "BITBUCKET_PR_ID"},
}
"""必須環境変数が未設定のときに参照する代替変数（Bitbucket Pipelines 組み込み変数）。"""


def resolve_platform(value: str | None) -> Platform:
    """プラットフォーム指定値を Platform に変換する。

    未指定（None / 空文字列）の場合は Platform.LOCAL。大文字小文字は区別しない。

    Raises:
        UnsupportedPlatformError: サポート外の値の場合。
    """
    if value is None or not value.strip():
        return Platform.LOCAL
    normalized = normalize_enum_value(value, Platform)
    try:
        return Platform(normalized)
    except ValueError:
        raise UnsupportedPlatformError(value, [p.value for p in Platform]) from None


def _collect_fields(
    platform: Platform,
    env_fields: Mapping[str, str],
    environ: Mapping[str, str],
) -> tuple[dict[str, str], list[str]]:
    fallbacks = _ENV_FALLBACKS.get(platform, {})
    values: dict[str, str] = {}
    missing: list[str] = []
    for env_name, field in env_fields.items():
        value = environ.get(env_name, "").strip()
        if not value and env_name in fallbacks:
            value = environ.get(fallbacks[env_name], "").strip()
        if value:
            values[field] = value
        else:
            missing.append(env_name)
    return values, missing


def load_credentials(
    platform: Platform,
    environ: Mapping[str, str],
) -> Credentials | None:
    """プラットフォームに必要な認証情報を環境変数から読み込む。

    Args:
        platform: 判定済みのプラットフォーム。
        environ: 環境変数のマッピング。

    Returns:
        リモートプラットフォームの場合は認証情報。local の場合は None。

    Raises:
        ConfigurationError: 必須環境変数が欠落している場合（欠落した全変数名を含む）、
            または値の形式が不正な場合。
    """
    if platform is Platform.LOCAL:
        return None

    model: type[GitHubCredentials] | type[BitbucketCredentials]
    if platform is Platform.GITHUB:
        env_fields, model, label = GITHUB_ENV_FIELDS, GitHubCredentials, "GitHub"
    else:
        env_fields, model, label = BITBUCKET_ENV_FIELDS, BitbucketCredentials, "Bitbucket"

    values, missing = _collect_fields(platform, env_fields, environ)
    if missing:
        raise ConfigurationError(
            f"Missing required variables for {label}: {', '.join(missing)}",
            missing=missing,
        )
    try:
        return model(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid {label} credentials: {e}") from e


def create_platform(
    config: ForgeReviewConfig,
    environ: Mapping[str, str],
    session: requests.Session | None = None,
) -> ReviewPlatform:
    """設定と環境変数から ReviewPlatform 実装を構築する。

    認証情報の検証はここで完結し、ネットワーク呼び出しは行わない。

    Raises:
        ConfigurationError: 必須の認証情報が欠落している場合。
    """
    credentials = load_credentials(config.platform, environ)
    if isinstance(credentials, GitHubCredentials):
        return GitHubPlatform(credentials, config.github_api_url, session)
    if isinstance(credentials, BitbucketCredentials):
        return BitbucketPlatform(credentials, config.bitbucket_api_url, session)
    return LocalPlatform(base_branch=config.base_branch)
