"""ReviewEngine — レビュー実行パイプライン。

プラットフォーム解決 → diff 取得 → レビュー生成 → 配信 を逐次実行する。
各ステージの出力が次ステージの前提であり、いずれかの失敗で実行全体が失敗する。
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

import requests

from forgereview.engine._delivery import NO_CHANGES_MESSAGE, ReviewDelivery
from forgereview.engine._generator import ReviewGenerator
from forgereview.engine._prompt import build_review_request
from forgereview.errors import EmptyReviewError
from forgereview.models._base import ForgeReviewBaseModel
from forgereview.models.config import ForgeReviewConfig
from forgereview.models.delivery import DeliveryDocument
from forgereview.models.platform import Platform
from forgereview.platforms import ReviewPlatform, create_platform

logger = logging.getLogger(__name__)


class EngineResult(ForgeReviewBaseModel):
    """ReviewEngine の実行結果。

    Attributes:
        platform: 実行したプラットフォーム。
        document: 保存・配信した文書。
        no_changes: 空 diff による短絡で終了した場合 True。
    """

    platform: Platform
    document: DeliveryDocument
    no_changes: bool = False


def execute_review(
    platform: ReviewPlatform,
    generator: ReviewGenerator,
    delivery: ReviewDelivery,
) -> EngineResult:
    """構築済みのコンポーネントでレビューを 1 回実行する。

    空 diff の場合はレビュー生成を行わず、固定メッセージを配信して正常終了する。

    Raises:
        RemoteFetchError: リモート diff 取得の失敗。
        LocalDiffError: ローカル diff 取得の失敗。
        EmptyReviewError: レビュー生成コマンドが出力を返さなかった場合。
        ArtifactWriteError: アーティファクト保存の失敗。
        RemoteDeliveryError: リモートへの投稿の失敗。
    """
    diff = platform.fetch_diff()

    if not diff.strip():
        logger.info("No changes detected in this PR")
        document = delivery.deliver(NO_CHANGES_MESSAGE, platform)
        return EngineResult(
            platform=platform.platform, document=document, no_changes=True
        )

    logger.debug("Diff size: %d characters", len(diff))

    review = generator.generate(build_review_request(diff))
    if not review.strip():
        raise EmptyReviewError("Review command produced no output")

    logger.debug("Review size: %d characters", len(review))

    document = delivery.deliver(review, platform)
    logger.info("Code review completed successfully")
    return EngineResult(platform=platform.platform, document=document)


def run_review(
    config: ForgeReviewConfig,
    environ: Mapping[str, str] | None = None,
    session: requests.Session | None = None,
) -> EngineResult:
    """設定からコンポーネントを構築し、レビューを実行する。

    認証情報とレビューコマンドの検証は diff 取得より前に完了する。

    Args:
        config: 解決済みの設定。
        environ: 認証情報を読み込む環境変数。None の場合は os.environ。
        session: リモート呼び出しに使う requests.Session。None の場合は新規作成。

    Returns:
        実行結果。

    Raises:
        ForgeReviewError: いずれかのステージが失敗した場合。
    """
    logger.info("Starting PR code review")
    logger.info("Platform: %s", config.platform.value)

    platform = create_platform(
        config, environ if environ is not None else os.environ, session
    )
    generator = ReviewGenerator.from_strings(config.review_command, config.review_args)
    delivery = ReviewDelivery(config.output_file, config.max_comment_length)

    return execute_review(platform, generator, delivery)
