"""ReviewDelivery — レビュー文書の整形・保存・配信。

1. 固定ヘッダー・フッターで本文を包む。
2. 長さ上限を超える場合は上限で切り詰め、切り詰め通知を付加する。
   通知は切り詰め後に付加するため、最終長は上限 + 通知長まで許容される。
3. アーティファクトファイルを上書き保存する（配信より前）。
4. プラットフォームの出力先へ配信する。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from forgereview.errors import ArtifactWriteError
from forgereview.models.delivery import DeliveryDocument
from forgereview.platforms import ReviewPlatform

logger = logging.getLogger(__name__)

REVIEW_HEADER: Final[str] = "## \U0001f916 Automated Code Review\n\n"
REVIEW_FOOTER: Final[str] = (
    "\n\n---\n*Generated by [Copilot CLI Code Reviewer](https://github.com)*"
)
TRUNCATION_NOTICE: Final[str] = "\n\n---\n*Comment truncated due to length limits*"

NO_CHANGES_MESSAGE: Final[str] = "No code changes detected in this pull request."
"""空 diff 時にレビュー本文の代わりに配信するメッセージ。"""


def format_document(review: str, max_length: int) -> DeliveryDocument:
    """レビュー本文を配信用文書に整形する。

    Args:
        review: レビュー本文（または NO_CHANGES_MESSAGE）。
        max_length: 切り詰め前の最大文字数。

    Returns:
        整形済みの DeliveryDocument。
    """
    text = f"{REVIEW_HEADER}{review}{REVIEW_FOOTER}"
    if len(text) <= max_length:
        return DeliveryDocument(text=text)
    logger.info(
        "Review is %d characters, truncating to %d", len(text), max_length
    )
    return DeliveryDocument(text=text[:max_length] + TRUNCATION_NOTICE, truncated=True)


def write_artifact(document: DeliveryDocument, path: Path) -> None:
    """文書をアーティファクトファイルに上書き保存する。

    親ディレクトリが存在しない場合は作成する。

    Raises:
        ArtifactWriteError: ディレクトリ作成または書き込みに失敗した場合。
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document.text, encoding="utf-8")
    except OSError as exc:
        raise ArtifactWriteError(
            f"Failed to write review to {path}: {exc}\n"
            "Set OUTPUT_FILE / --output-file to a writable location."
        ) from exc


class ReviewDelivery:
    """出力先パスと長さ上限を保持し、レビューを配信するコンポーネント。"""

    def __init__(self, output_file: Path, max_comment_length: int) -> None:
        if max_comment_length <= 0:
            raise ValueError(
                f"max_comment_length must be positive, got {max_comment_length}"
            )
        self.output_file = output_file
        self.max_comment_length = max_comment_length

    def deliver(self, review: str, platform: ReviewPlatform) -> DeliveryDocument:
        """レビュー本文を整形・保存し、プラットフォームへ配信する。

        保存は配信より先に行うため、配信が失敗してもレビューは失われない。

        Args:
            review: レビュー本文（または NO_CHANGES_MESSAGE）。
            platform: 配信先プラットフォーム。

        Returns:
            配信した DeliveryDocument。

        Raises:
            ArtifactWriteError: アーティファクトの保存に失敗した場合。
            RemoteDeliveryError: リモートへの投稿に失敗した場合。
        """
        document = format_document(review, self.max_comment_length)
        write_artifact(document, self.output_file)
        logger.info("Review saved to: %s", self.output_file)
        platform.post_comment(document)
        return document
