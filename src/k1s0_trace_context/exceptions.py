"""trace_context ライブラリの例外型定義"""

from __future__ import annotations


class TraceContextError(Exception):
    """trace_context ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class TraceContextErrorCodes:
    """TraceContextError のエラーコード定数。"""

    # ヘッダーの形式（長さ・16進数表記）が不正
    UNPARSEABLE: str = "UNPARSEABLE"
    # 形式は正しいが値として受け付けられない
    INVALID: str = "INVALID"
