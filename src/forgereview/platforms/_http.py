"""リモートプラットフォーム共通の HTTP ヘルパー。"""

from __future__ import annotations

import logging
from typing import Any, Final

import requests

from forgereview.errors import RemoteError
from forgereview.models.platform import Platform

logger = logging.getLogger(__name__)

USER_AGENT: Final[str] = "forgereview"

_ERROR_BODY_MAX_CHARS: Final[int] = 500
"""エラーメッセージに含めるレスポンス本文の最大文字数。"""


def create_session() -> requests.Session:
    """User-Agent 設定済みの requests.Session を生成する。

    リトライアダプタはマウントしない（requests 標準の挙動のみ）。
    """
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    return session


def send_request(
    session: requests.Session,
    method: str,
    url: str,
    *,
    platform: Platform,
    call: str,
    error_cls: type[RemoteError],
    **kwargs: Any,
) -> requests.Response:
    """HTTP リクエストを送信し、成功レスポンスを返す。

    Args:
        session: 認証ヘッダーを付与する requests.Session。
        method: HTTP メソッド。
        url: リクエスト先 URL。
        platform: エラー情報に付与するプラットフォーム。
        call: エラー情報に付与する呼び出し名。
        error_cls: 失敗時に送出する例外クラス。
        **kwargs: session.request に渡す追加引数。

    Returns:
        2xx のレスポンス。

    Raises:
        RemoteError: 通信エラー、または 2xx 以外のステータス（error_cls のインスタンス）。
    """
    logger.debug("%s %s", method, url)
    try:
        response = session.request(method, url, **kwargs)
    except requests.RequestException as e:
        raise error_cls(
            f"{platform.value} {call} request failed: {e}",
            platform=platform.value,
            call=call,
        ) from e

    if not response.ok:
        body = response.text[:_ERROR_BODY_MAX_CHARS].strip()
        raise error_cls(
            f"{platform.value} {call} failed with HTTP {response.status_code}: {body}",
            platform=platform.value,
            call=call,
            status_code=response.status_code,
        )
    return response


def decode_body(response: requests.Response) -> str:
    """レスポンス本文を UTF-8 としてデコードする。

    Content-Type に charset がない text/plain を ISO-8859-1 と推定する
    requests の既定動作を避けるため、response.text は使わない。
    """
    return response.content.decode("utf-8", errors="replace")
