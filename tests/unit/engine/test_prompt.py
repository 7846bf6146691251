"""レビュー依頼文構築のテスト。"""

from __future__ import annotations

from forgereview.engine import REVIEW_PROMPT, build_review_request


class TestBuildReviewRequest:
    def test_wraps_diff_in_fence(self) -> None:
        request = build_review_request("diff --git a/f b/f\n+x")
        assert request == f"{REVIEW_PROMPT}\ndiff --git a/f b/f\n+x\n```"

    def test_prompt_ends_with_diff_fence(self) -> None:
        assert REVIEW_PROMPT.endswith("```diff")

    def test_prompt_lists_focus_areas(self) -> None:
        for area in ("Bugs & Issues", "Security", "Performance", "Code Quality", "Testing"):
            assert area in REVIEW_PROMPT

    def test_diff_embedded_verbatim(self) -> None:
        """diff 中のフェンスやテンプレート記法もそのまま埋め込む。"""
        diff = "+```python\n+print('{x}')\n"
        assert diff in build_review_request(diff)
