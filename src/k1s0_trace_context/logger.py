"""トレースコンテキストの警告出力先"""

from __future__ import annotations

import structlog

LOGGER_NAME = "k1s0_trace_context"


def default_logger() -> structlog.stdlib.BoundLogger:
    """TraceContext にロガーが渡されなかった場合に使うロガーを返す。

    structlog の設定はアプリケーション側で行う。このライブラリは設定を変更しない。
    """
    return structlog.stdlib.get_logger(LOGGER_NAME)
