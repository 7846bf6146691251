"""レビュー実行エンジン。

以下のパイプラインでコードレビューを実行する:

1. プラットフォーム解決と認証情報の検証（create_platform）
2. diff 取得（ReviewPlatform.fetch_diff）
3. レビュー依頼文の構築と生成コマンドの実行（ReviewGenerator）
4. 文書の整形・保存・配信（ReviewDelivery）
"""

from forgereview.engine._delivery import (
    NO_CHANGES_MESSAGE,
    REVIEW_FOOTER,
    REVIEW_HEADER,
    TRUNCATION_NOTICE,
    ReviewDelivery,
    format_document,
    write_artifact,
)
from forgereview.engine._engine import EngineResult, execute_review, run_review
from forgereview.engine._generator import ReviewGenerator
from forgereview.engine._prompt import REVIEW_PROMPT, build_review_request

__all__ = [
    "EngineResult",
    "NO_CHANGES_MESSAGE",
    "REVIEW_FOOTER",
    "REVIEW_HEADER",
    "REVIEW_PROMPT",
    "ReviewDelivery",
    "ReviewGenerator",
    "TRUNCATION_NOTICE",
    "build_review_request",
    "execute_review",
    "format_document",
    "run_review",
    "write_artifact",
]
