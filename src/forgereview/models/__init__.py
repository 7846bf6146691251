"""forgereview ドメインモデルパッケージ。"""

from forgereview.models._base import ForgeReviewBaseModel
from forgereview.models.config import ForgeReviewConfig
from forgereview.models.delivery import DeliveryDocument
from forgereview.models.exit_code import ExitCode
from forgereview.models.platform import (
    BitbucketCredentials,
    Credentials,
    GitHubCredentials,
    Platform,
)

__all__ = [
    "BitbucketCredentials",
    "Credentials",
    "DeliveryDocument",
    "ExitCode",
    "ForgeReviewBaseModel",
    "ForgeReviewConfig",
    "GitHubCredentials",
    "Platform",
]
