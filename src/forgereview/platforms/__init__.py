"""プラットフォーム抽象化パッケージ。

GitHub / Bitbucket / local の 3 実行環境を ReviewPlatform プロトコルで統一する。
"""

from forgereview.platforms._base import ReviewPlatform
from forgereview.platforms._bitbucket import BitbucketPlatform
from forgereview.platforms._github import GitHubPlatform
from forgereview.platforms._local import LocalPlatform
from forgereview.platforms._resolver import (
    create_platform,
    load_credentials,
    resolve_platform,
)

__all__ = [
    "BitbucketPlatform",
    "GitHubPlatform",
    "LocalPlatform",
    "ReviewPlatform",
    "create_platform",
    "load_credentials",
    "resolve_platform",
]
