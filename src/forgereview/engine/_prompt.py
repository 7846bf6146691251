"""レビュー依頼文の構築。

固定の指示テンプレートの後に diff をコードフェンスで囲んで連結する。
diff の内容は解釈せず、そのまま埋め込む。
"""

from __future__ import annotations

from typing import Final

REVIEW_PROMPT: Final[str] = """\
You are a senior software engineer performing a code review. Analyze the following git diff and provide a thorough code review.

Focus on:
1. **Bugs & Issues**: Potential bugs, logic errors, or runtime issues
2. **Security**: Security vulnerabilities or concerns
3. **Performance**: Performance issues or optimization opportunities
4. **Code Quality**: Readability, maintainability, and best practices
5. **Testing**: Missing tests or test coverage concerns

Format your response as markdown with clear sections. Be constructive and specific.
For each issue, reference the file and line if possible.

If the code looks good, acknowledge what was done well.

Here is the diff to review:

```diff"""
"""レビュー指示テンプレート。末尾は diff 用の開きフェンス。"""

CLOSING_FENCE: Final[str] = "```"


def build_review_request(diff: str) -> str:
    """指示テンプレートと diff からレビュー依頼文を構築する。

    Args:
        diff: unified diff テキスト（非空）。

    Returns:
        テンプレート、diff、閉じフェンスを改行で連結した文字列。
    """
    return f"{REVIEW_PROMPT}\n{diff}\n{CLOSING_FENCE}"
