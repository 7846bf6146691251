"""ReviewDelivery のテスト。"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from forgereview.engine import (
    REVIEW_FOOTER,
    REVIEW_HEADER,
    TRUNCATION_NOTICE,
    ReviewDelivery,
    format_document,
    write_artifact,
)
from forgereview.errors import ArtifactWriteError, RemoteDeliveryError
from forgereview.models.delivery import DeliveryDocument


class TestFormatDocument:
    """format_document のテスト。"""

    def test_wraps_review(self) -> None:
        document = format_document("R", 65000)
        assert document.text == (
            "## \U0001f916 Automated Code Review\n\nR"
            "\n\n---\n*Generated by [Copilot CLI Code Reviewer](https://github.com)*"
        )
        assert document.truncated is False

    def test_exactly_at_limit_not_truncated(self) -> None:
        length = len(REVIEW_HEADER) + 10 + len(REVIEW_FOOTER)
        document = format_document("x" * 10, length)
        assert document.truncated is False
        assert len(document.text) == length

    def test_truncates_and_appends_notice(self) -> None:
        document = format_document("x" * 5000, 1000)
        assert document.truncated is True
        assert len(document.text) == 1000 + len(TRUNCATION_NOTICE)
        assert document.text.startswith(REVIEW_HEADER)
        assert document.text.endswith(TRUNCATION_NOTICE)
        assert REVIEW_FOOTER not in document.text


class TestWriteArtifact:
    """write_artifact のテスト。"""

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "review.md"
        write_artifact(DeliveryDocument(text="abc"), path)
        assert path.read_text(encoding="utf-8") == "abc"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "review.md"
        path.write_text("old content that is longer", encoding="utf-8")
        write_artifact(DeliveryDocument(text="new"), path)
        write_artifact(DeliveryDocument(text="new"), path)
        assert path.read_text(encoding="utf-8") == "new"

    def test_unwritable_location(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(ArtifactWriteError, match="OUTPUT_FILE"):
            write_artifact(DeliveryDocument(text="abc"), blocker / "review.md")


class TestReviewDelivery:
    """ReviewDelivery.deliver のテスト。"""

    def test_rejects_non_positive_limit(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            ReviewDelivery(tmp_path / "r.md", 0)

    def test_saves_then_posts(
        self, tmp_path: Path, make_platform: Callable[..., Any]
    ) -> None:
        platform = make_platform()
        path = tmp_path / "r.md"
        document = ReviewDelivery(path, 65000).deliver("R", platform)

        assert platform.posted == [document]
        assert path.read_text(encoding="utf-8") == document.text

    def test_artifact_kept_when_post_fails(self, tmp_path: Path) -> None:
        class FailingPlatform:
            platform = "github"

            def fetch_diff(self) -> str:
                return ""

            def post_comment(self, document: DeliveryDocument) -> None:
                raise RemoteDeliveryError(
                    "github post_comment failed with HTTP 403: forbidden",
                    platform="github",
                    call="post_comment",
                    status_code=403,
                )

        path = tmp_path / "r.md"
        with pytest.raises(RemoteDeliveryError):
            ReviewDelivery(path, 65000).deliver("R", FailingPlatform())
        assert path.read_text(encoding="utf-8").startswith(REVIEW_HEADER)
