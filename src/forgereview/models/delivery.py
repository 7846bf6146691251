"""DeliveryDocument — 投稿・保存される最終レビュー文書。"""

from __future__ import annotations

from pydantic import Field

from forgereview.models._base import ForgeReviewBaseModel


class DeliveryDocument(ForgeReviewBaseModel):
    """ヘッダー・フッター付きで長さ上限を適用済みのレビュー文書。

    Attributes:
        text: アーティファクトへ書き込まれ、投稿される本文。
        truncated: 長さ上限により切り詰められた場合 True。
    """

    text: str = Field(min_length=1)
    truncated: bool = False
