"""設定管理モデル。"""

from __future__ import annotations

from pathlib import Path
from typing import Final

from pydantic import Field, StrictBool, field_validator

from forgereview.models._base import ForgeReviewBaseModel, normalize_enum_value
from forgereview.models.platform import Platform

DEFAULT_REVIEW_COMMAND: Final[str] = "gh copilot explain"
DEFAULT_OUTPUT_FILE: Final[Path] = Path("/tmp/pr-review-output.md")
DEFAULT_MAX_COMMENT_LENGTH: Final[int] = 65000
DEFAULT_GITHUB_API_URL: Final[str] = "https://api.github.com"
DEFAULT_BITBUCKET_API_URL: Final[str] = "https://api.bitbucket.org/2.0"


class ForgeReviewConfig(ForgeReviewBaseModel):
    """全設定項目を統合した不変モデル。

    デフォルト値のみで有効なインスタンスを構築可能（local プラットフォーム）。
    認証情報はこのモデルに含めない。環境変数からのみ読み込まれる。
    """

    # 実行設定
    platform: Platform = Platform.LOCAL
    review_command: str = Field(default=DEFAULT_REVIEW_COMMAND, min_length=1)
    review_args: str = ""
    base_branch: str | None = Field(default=None, min_length=1)
    debug: StrictBool = False

    # 出力設定
    output_file: Path = DEFAULT_OUTPUT_FILE
    max_comment_length: int = Field(default=DEFAULT_MAX_COMMENT_LENGTH, gt=0)

    # API エンドポイント
    github_api_url: str = Field(default=DEFAULT_GITHUB_API_URL, min_length=1)
    bitbucket_api_url: str = Field(default=DEFAULT_BITBUCKET_API_URL, min_length=1)

    @field_validator("platform", mode="before")
    @classmethod
    def normalize_platform(cls, v: object) -> object:
        return normalize_enum_value(v, Platform)

    @field_validator("github_api_url", "bitbucket_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("base_branch")
    @classmethod
    def reject_option_like_branch(cls, v: str | None) -> str | None:
        """git のオプションとして解釈される "-" 始まりの値を拒否する。"""
        if v is not None and v.startswith("-"):
            raise ValueError(f"base_branch must not start with '-', got '{v}'")
        return v
