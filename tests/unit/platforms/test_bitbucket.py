"""BitbucketPlatform のテスト。"""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
import requests

from forgereview.errors import RemoteDeliveryError, RemoteFetchError
from forgereview.models.delivery import DeliveryDocument
from forgereview.models.platform import BitbucketCredentials, Platform
from forgereview.platforms import BitbucketPlatform

CREDENTIALS = BitbucketCredentials(
    token="bb_token", workspace="acme", repo_slug="widgets", pr_number="9"
)
BASE = "https://api.bitbucket.org/2.0/repositories/acme/widgets/pullrequests/9"


@pytest.fixture
def platform(fake_session: MagicMock) -> BitbucketPlatform:
    return BitbucketPlatform(CREDENTIALS, "https://api.bitbucket.org/2.0", fake_session)


class TestBitbucketFetchDiff:
    """fetch_diff のテスト。"""

    def test_fetches_diff_resource(
        self,
        platform: BitbucketPlatform,
        fake_session: MagicMock,
        make_response: Callable[..., requests.Response],
    ) -> None:
        fake_session.request.return_value = make_response(200, "diff --git a/y b/y\n")
        assert platform.fetch_diff() == "diff --git a/y b/y\n"
        args, kwargs = fake_session.request.call_args
        assert args == ("GET", f"{BASE}/diff")
        assert kwargs["headers"] == {"Authorization": "Bearer bb_token"}

    def test_empty_diff_is_not_an_error(
        self,
        platform: BitbucketPlatform,
        fake_session: MagicMock,
        make_response: Callable[..., requests.Response],
    ) -> None:
        fake_session.request.return_value = make_response(200, "")
        assert platform.fetch_diff() == ""

    def test_server_error_raises_fetch_error(
        self,
        platform: BitbucketPlatform,
        fake_session: MagicMock,
        make_response: Callable[..., requests.Response],
    ) -> None:
        fake_session.request.return_value = make_response(500, "boom")
        with pytest.raises(RemoteFetchError) as exc_info:
            platform.fetch_diff()
        assert exc_info.value.platform == Platform.BITBUCKET.value
        assert exc_info.value.status_code == 500


class TestBitbucketPostComment:
    """post_comment のテスト。"""

    def test_posts_nested_content_raw(
        self,
        platform: BitbucketPlatform,
        fake_session: MagicMock,
        make_response: Callable[..., requests.Response],
    ) -> None:
        fake_session.request.return_value = make_response(201, "{}")
        platform.post_comment(DeliveryDocument(text="looks fine"))
        args, kwargs = fake_session.request.call_args
        assert args == ("POST", f"{BASE}/comments")
        assert kwargs["json"] == {"content": {"raw": "looks fine"}}

    def test_unauthorized_raises_delivery_error(
        self,
        platform: BitbucketPlatform,
        fake_session: MagicMock,
        make_response: Callable[..., requests.Response],
    ) -> None:
        fake_session.request.return_value = make_response(401, "unauthorized")
        with pytest.raises(RemoteDeliveryError, match="401") as exc_info:
            platform.post_comment(DeliveryDocument(text="looks fine"))
        assert exc_info.value.platform == "bitbucket"
