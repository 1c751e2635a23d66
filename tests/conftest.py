"""trace_context テスト共通フィクスチャ"""

from collections.abc import Iterator

import pytest
import structlog

EXAMPLE_1 = "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"
EXAMPLE_2 = "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-00"


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """テスト間で structlog の設定を持ち越さないこと。"""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


class FixedIdGenerator:
    """決まった ID を返すテスト用ジェネレーター。"""

    def __init__(self, trace_id: bytes, span_id: bytes) -> None:
        self.trace_id = trace_id
        self.span_id = span_id

    def generate_trace_id_bytes(self) -> bytes:
        return self.trace_id

    def generate_span_id_bytes(self) -> bytes:
        return self.span_id
