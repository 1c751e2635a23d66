"""トレースID・スパンID生成"""

from __future__ import annotations

from typing import Protocol

from opentelemetry.sdk.trace import id_generator

TRACE_ID_BYTES = 16
SPAN_ID_BYTES = 8


class IdGenerator(Protocol):
    """ID 生成プロトコル。"""

    def generate_trace_id_bytes(self) -> bytes: ...

    def generate_span_id_bytes(self) -> bytes: ...


class RandomIdGenerator:
    """OpenTelemetry SDK の RandomIdGenerator をバイト列で返すアダプター。

    全ゼロの ID は生成されない。
    """

    def __init__(self, generator: id_generator.IdGenerator | None = None) -> None:
        self._generator = generator or id_generator.RandomIdGenerator()

    def generate_trace_id_bytes(self) -> bytes:
        return self._generator.generate_trace_id().to_bytes(TRACE_ID_BYTES, "big")

    def generate_span_id_bytes(self) -> bytes:
        return self._generator.generate_span_id().to_bytes(SPAN_ID_BYTES, "big")
