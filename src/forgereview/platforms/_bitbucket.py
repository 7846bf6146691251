"""BitbucketPlatform — Bitbucket Cloud REST API 経由の diff 取得とコメント投稿。"""

from __future__ import annotations

import logging

import requests

from forgereview.errors import RemoteDeliveryError, RemoteFetchError
from forgereview.models.delivery import DeliveryDocument
from forgereview.models.platform import BitbucketCredentials, Platform
from forgereview.platforms._http import create_session, decode_body, send_request

logger = logging.getLogger(__name__)


class BitbucketPlatform:
    """Bitbucket Pipelines 上で PR をレビューするプラットフォーム実装。

    diff エンドポイントはリダイレクトを返すため、requests の既定動作で追従する。
    """

    def __init__(
        self,
        credentials: BitbucketCredentials,
        api_url: str,
        session: requests.Session | None = None,
    ) -> None:
        self._credentials = credentials
        self._api_url = api_url.rstrip("/")
        self._session = session if session is not None else create_session()

    @property
    def platform(self) -> Platform:
        return Platform.BITBUCKET

    @property
    def pull_request_url(self) -> str:
        creds = self._credentials
        return (
            f"{self._api_url}/repositories/{creds.workspace}/{creds.repo_slug}"
            f"/pullrequests/{creds.pr_number}"
        )

    def fetch_diff(self) -> str:
        """PR の diff リソースを取得し、レスポンス本文をそのまま返す。

        Raises:
            RemoteFetchError: 通信エラー、または 2xx 以外のステータスの場合。
        """
        logger.info("Fetching diff from Bitbucket PR #%s", self._credentials.pr_number)
        response = send_request(
            self._session,
            "GET",
            f"{self.pull_request_url}/diff",
            platform=self.platform,
            call="fetch_diff",
            error_cls=RemoteFetchError,
            headers={"Authorization": f"Bearer {self._credentials.token}"},
        )
        return decode_body(response)

    def post_comment(self, document: DeliveryDocument) -> None:
        """レビュー文書を PR コメントとして投稿する。

        Raises:
            RemoteDeliveryError: 通信エラー、または 2xx 以外のステータスの場合。
        """
        logger.info("Posting comment to Bitbucket PR #%s", self._credentials.pr_number)
        send_request(
            self._session,
            "POST",
            f"{self.pull_request_url}/comments",
            platform=self.platform,
            call="post_comment",
            error_cls=RemoteDeliveryError,
            headers={"Authorization": f"Bearer {self._credentials.token}"},
            json={"content": {"raw": document.text}},
        )
