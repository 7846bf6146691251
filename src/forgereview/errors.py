"""forgereview の例外階層。

全ての例外は実行に対して致命的であり、CLI 層で終了コードに変換される。
"""

from __future__ import annotations

from collections.abc import Sequence


class ForgeReviewError(Exception):
    """forgereview の全例外の基底クラス。"""


class ConfigurationError(ForgeReviewError):
    """必須入力の欠落、または設定値の不正。I/O 開始前に検出される。

    Attributes:
        missing: 欠落している環境変数名。設定値の不正の場合は空タプル。
    """

    def __init__(self, message: str, missing: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.missing: tuple[str, ...] = tuple(missing)


class UnsupportedPlatformError(ForgeReviewError):
    """プラットフォーム指定値がサポート対象外。"""

    def __init__(self, value: str, supported: Sequence[str]) -> None:
        super().__init__(
            f"Unknown platform: '{value}'. "
            f"Supported platforms: {', '.join(supported)}"
        )
        self.value = value


class RemoteError(ForgeReviewError):
    """リモート API 呼び出しの失敗。

    Attributes:
        platform: 呼び出し先プラットフォーム名。
        call: 失敗した呼び出しの名前（fetch_diff / post_comment）。
        status_code: HTTP ステータスコード。通信エラーの場合は None。
    """

    def __init__(
        self,
        message: str,
        *,
        platform: str,
        call: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.platform = platform
        self.call = call
        self.status_code = status_code


class RemoteFetchError(RemoteError):
    """diff 取得リクエストの失敗。"""


class RemoteDeliveryError(RemoteError):
    """コメント投稿リクエストの失敗。"""


class LocalDiffError(ForgeReviewError):
    """ローカルの git diff 取得の失敗。"""


class EmptyReviewError(ForgeReviewError):
    """レビュー生成コマンドが 2 つの呼び出し形式のいずれでも出力を返さなかった。"""


class ArtifactWriteError(ForgeReviewError):
    """レビュー結果ファイルの書き込み失敗。"""
