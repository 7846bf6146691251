"""GitHubPlatform — GitHub REST API 経由の diff 取得とコメント投稿。"""

from __future__ import annotations

import logging
from typing import Final

import requests

from forgereview.errors import RemoteDeliveryError, RemoteFetchError
from forgereview.models.delivery import DeliveryDocument
from forgereview.models.platform import GitHubCredentials, Platform
from forgereview.platforms._http import create_session, decode_body, send_request

logger = logging.getLogger(__name__)

GITHUB_API_VERSION: Final[str] = "2022-11-28"
DIFF_MEDIA_TYPE: Final[str] = "application/vnd.github.v3.diff"
JSON_MEDIA_TYPE: Final[str] = "application/vnd.github.v3+json"


class GitHubPlatform:
    """GitHub Actions 上で PR をレビューするプラットフォーム実装。"""

    def __init__(
        self,
        credentials: GitHubCredentials,
        api_url: str,
        session: requests.Session | None = None,
    ) -> None:
        self._credentials = credentials
        self._api_url = api_url.rstrip("/")
        self._session = session if session is not None else create_session()

    @property
    def platform(self) -> Platform:
        return Platform.GITHUB

    def _headers(self, accept: str) -> dict[str, str]:
        return {
            "Accept": accept,
            "Authorization": f"Bearer {self._credentials.token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    @property
    def pull_request_url(self) -> str:
        """PR リソースの URL。"""
        return (
            f"{self._api_url}/repos/{self._credentials.repository}"
            f"/pulls/{self._credentials.pr_number}"
        )

    @property
    def comments_url(self) -> str:
        """PR（Issue）コメントリソースの URL。"""
        return (
            f"{self._api_url}/repos/{self._credentials.repository}"
            f"/issues/{self._credentials.pr_number}/comments"
        )

    def fetch_diff(self) -> str:
        """PR リソースを diff 表現で取得し、レスポンス本文をそのまま返す。

        Raises:
            RemoteFetchError: 通信エラー、または 2xx 以外のステータスの場合。
        """
        logger.info("Fetching diff from GitHub PR #%s", self._credentials.pr_number)
        response = send_request(
            self._session,
            "GET",
            self.pull_request_url,
            platform=self.platform,
            call="fetch_diff",
            error_cls=RemoteFetchError,
            headers=self._headers(DIFF_MEDIA_TYPE),
        )
        return decode_body(response)

    def post_comment(self, document: DeliveryDocument) -> None:
        """レビュー文書を PR コメントとして投稿する。

        Raises:
            RemoteDeliveryError: 通信エラー、または 2xx 以外のステータスの場合。
        """
        logger.info("Posting comment to GitHub PR #%s", self._credentials.pr_number)
        send_request(
            self._session,
            "POST",
            self.comments_url,
            platform=self.platform,
            call="post_comment",
            error_cls=RemoteDeliveryError,
            headers=self._headers(JSON_MEDIA_TYPE),
            json={"body": document.text},
        )
