"""ExitCode — 終了コードの定義。"""

from enum import IntEnum


class ExitCode(IntEnum):
    """プロセス終了コード。

    空 diff による短絡終了も SUCCESS として扱う。
    INPUT_ERROR は I/O 開始前に検出される設定不備を表す。
    """

    SUCCESS = 0
    EXECUTION_ERROR = 1
    INPUT_ERROR = 2
