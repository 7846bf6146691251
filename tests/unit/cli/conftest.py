"""CLI テスト共通フィクスチャ。"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

PATCH_USER_CONFIG_PATH = "forgereview.config._resolver.get_user_config_path"


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """実行ディレクトリとユーザー設定を tmp_path 配下に隔離する。"""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    with patch(PATCH_USER_CONFIG_PATH, return_value=tmp_path / "home" / "config.toml"):
        yield


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """configure_logging が追加したハンドラをテスト後に取り除く。"""
    yield
    logger = logging.getLogger("forgereview")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
