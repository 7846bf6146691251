"""テスト共通フィクスチャ。"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from unittest.mock import MagicMock

import pytest
import requests

from forgereview.config._loader import ENV_CONFIG_KEYS
from forgereview.models.delivery import DeliveryDocument
from forgereview.models.platform import Platform

_CREDENTIAL_ENV_VARS = (
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "PR_NUMBER",
    "BITBUCKET_TOKEN",
    "BITBUCKET_WORKSPACE",
    "BITBUCKET_REPO_SLUG",
    "BITBUCKET_PR_ID",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """CI 環境の環境変数がテストに漏れないようにする。"""
    for name in (*ENV_CONFIG_KEYS, *_CREDENTIAL_ENV_VARS):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """ステータスと本文を指定して requests.Response を生成するファクトリ。"""

    def _make(status_code: int = 200, body: str = "") -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response._content = body.encode("utf-8")
        response.encoding = "utf-8"
        return response

    return _make


@pytest.fixture
def fake_session() -> MagicMock:
    """request() 呼び出しを記録する requests.Session のモック。"""
    return MagicMock(spec=requests.Session)


class StubGenerator:
    """固定テキストを返すレビュー生成コマンドのスタブ。"""

    def __init__(self, output: str = "R") -> None:
        self.output = output
        self.requests: list[str] = []

    def generate(self, request: str) -> str:
        self.requests.append(request)
        return self.output


class RecordingPlatform:
    """diff を固定で返し、配信された文書を記録するプラットフォームのスタブ。"""

    def __init__(self, diff: str = "", platform: Platform = Platform.LOCAL) -> None:
        self._diff = diff
        self._platform = platform
        self.fetch_count = 0
        self.posted: list[DeliveryDocument] = []

    @property
    def platform(self) -> Platform:
        return self._platform

    def fetch_diff(self) -> str:
        self.fetch_count += 1
        return self._diff

    def post_comment(self, document: DeliveryDocument) -> None:
        self.posted.append(document)


@pytest.fixture
def stub_generator() -> StubGenerator:
    return StubGenerator()


@pytest.fixture
def make_platform() -> Callable[..., RecordingPlatform]:
    return RecordingPlatform
