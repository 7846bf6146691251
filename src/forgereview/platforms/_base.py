"""ReviewPlatform — プラットフォーム差分を吸収するプロトコル。

diff 取得とレビュー結果の配信の 2 つの能力を持つ。
プラットフォームごとに 1 つの実装があり、各ステージはこのプロトコル経由でのみ分岐する。
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from forgereview.models.delivery import DeliveryDocument
from forgereview.models.platform import Platform


@runtime_checkable
class ReviewPlatform(Protocol):
    """レビュー対象の diff を取得し、結果を配信するプロトコル。"""

    @property
    def platform(self) -> Platform:
        """実装が対応するプラットフォーム。"""
        ...

    def fetch_diff(self) -> str:
        """レビュー対象の unified diff を取得する。

        変更がない場合は空文字列を返す（エラーではない）。
        """
        ...

    def post_comment(self, document: DeliveryDocument) -> None:
        """レビュー文書をプラットフォームの出力先へ配信する。"""
        ...
