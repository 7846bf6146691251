"""設定管理モジュール。"""

from forgereview.config._resolver import resolve_config

__all__ = [
    "resolve_config",
]
