"""実行プラットフォームと認証情報のモデル。"""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field, field_validator

from forgereview.models._base import ForgeReviewBaseModel


class Platform(StrEnum):
    """レビューが実行されるプラットフォーム。

    1 回の実行につき 1 つだけ選択され、実行中は変化しない。
    """

    GITHUB = "github"
    BITBUCKET = "bitbucket"
    LOCAL = "local"


class GitHubCredentials(ForgeReviewBaseModel):
    """GitHub Actions 上での実行に必要な認証情報。"""

    token: str = Field(min_length=1, repr=False)
    repository: str = Field(min_length=1)
    pr_number: str = Field(min_length=1)

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        """owner/repo 形式であることを検証する。"""
        owner, sep, name = v.partition("/")
        if not sep or not owner or not name:
            raise ValueError(f"repository must be in 'owner/repo' form, got '{v}'")
        return v


class BitbucketCredentials(ForgeReviewBaseModel):
    """Bitbucket Pipelines 上での実行に必要な認証情報。"""

    token: str = Field(min_length=1, repr=False)
    workspace: str = Field(min_length=1)
    repo_slug: str = Field(min_length=1)
    pr_number: str = Field(min_length=1)


Credentials = GitHubCredentials | BitbucketCredentials
"""リモートプラットフォーム用認証情報の共用体型。"""
