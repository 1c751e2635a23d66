"""W3C traceparent ヘッダーのパースとシリアライズ"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntFlag

from .exceptions import TraceContextError, TraceContextErrorCodes
from .hexcodec import bytes_from_hex, hex_from_bytes

TRACE_ID_HEX_LENGTH = 32
PARENT_ID_HEX_LENGTH = 16
TRACE_FLAGS_HEX_LENGTH = 2
# version != 0 のヘッダーに要求される最小長
MIN_FUTURE_VERSION_LENGTH = 55

_VERSION_RE = re.compile(r"[0-9a-fA-F]{2}")


class TraceFlags(IntFlag):
    """trace-flags フィールド。bit 0 以外は予約済み。"""

    NONE = 0x00
    SAMPLED = 0x01


@dataclass(frozen=True)
class TraceParent:
    """traceparent ヘッダーを構成する値。"""

    version: int
    trace_id: bytes  # 16 bytes
    parent_id: bytes  # 8 bytes
    sampled: bool = False
    extra_fields: tuple[str, ...] = ()

    @property
    def trace_flags(self) -> TraceFlags:
        return TraceFlags.SAMPLED if self.sampled else TraceFlags.NONE


NULL_TRACE_PARENT = TraceParent(version=0, trace_id=bytes(16), parent_id=bytes(8))


def null_trace_parent() -> TraceParent:
    """上流のトレースが存在しないことを表す全ゼロの TraceParent を返す。"""
    return NULL_TRACE_PARENT


def is_valid_id(id_bytes: bytes) -> bool:
    """ID に 0 以外のバイトが1つでも含まれていれば True。"""
    return any(id_bytes)


def _unparseable(message: str, cause: Exception | None = None) -> TraceContextError:
    return TraceContextError(
        code=TraceContextErrorCodes.UNPARSEABLE,
        message=message,
        cause=cause,
    )


def _invalid(message: str) -> TraceContextError:
    return TraceContextError(code=TraceContextErrorCodes.INVALID, message=message)


def parse_traceparent(value: str) -> TraceParent:
    """traceparent ヘッダー文字列を TraceParent に変換する。

    Raises:
        TraceContextError: 形式が不正な場合は UNPARSEABLE、
            値が受け付けられない場合は INVALID
    """
    version_field, *fields = value.split("-")
    if not _VERSION_RE.fullmatch(version_field):
        raise _unparseable("Invalid value for traceparent")
    version = int(version_field, 16)

    fields += [""] * (3 - len(fields))
    trace_id_hex, parent_id_hex, flags_hex, *extra_fields = fields

    # 長さの検査はデコードより先に行う
    if len(trace_id_hex) != TRACE_ID_HEX_LENGTH:
        raise _unparseable("Trace ID found in traceparent is the wrong length")
    if len(parent_id_hex) != PARENT_ID_HEX_LENGTH:
        raise _unparseable("Parent ID found in traceparent is the wrong length")
    if len(flags_hex) != TRACE_FLAGS_HEX_LENGTH:
        raise _unparseable("TraceFlags found in traceparent is the wrong length")

    try:
        trace_id = bytes_from_hex(trace_id_hex)
        parent_id = bytes_from_hex(parent_id_hex)
        flags = bytes_from_hex(flags_hex)[0]
    except ValueError as e:
        raise _unparseable("Non-hex characters found in traceparent", cause=e) from e

    if not is_valid_id(trace_id):
        raise _invalid("Invalid Trace ID found in traceparent")
    if not is_valid_id(parent_id):
        raise _invalid("Invalid Parent ID found in traceparent")

    sampled = (flags & TraceFlags.SAMPLED) == TraceFlags.SAMPLED

    if version == 0:
        if extra_fields:
            raise _invalid("Extra fields found in traceparent v0")
        return TraceParent(
            version=version,
            trace_id=trace_id,
            parent_id=parent_id,
            sampled=sampled,
        )

    if len(value) < MIN_FUTURE_VERSION_LENGTH:
        raise _invalid("Value for traceparent is too short")

    return TraceParent(
        version=version,
        trace_id=trace_id,
        parent_id=parent_id,
        sampled=sampled,
        extra_fields=tuple(extra_fields),
    )


@dataclass(frozen=True)
class ParseResult:
    """parse_traceparent の結果。成功時は value、失敗時は error_code を持つ。"""

    value: TraceParent | None = None
    error_code: str | None = None
    message: str = ""

    @property
    def is_ok(self) -> bool:
        return self.error_code is None

    @classmethod
    def ok(cls, value: TraceParent) -> ParseResult:
        return cls(value=value)

    @classmethod
    def error(cls, code: str, message: str) -> ParseResult:
        return cls(error_code=code, message=message)


def parse_traceparent_result(value: str) -> ParseResult:
    """parse_traceparent の例外を ParseResult に変換して返す。"""
    try:
        return ParseResult.ok(parse_traceparent(value))
    except TraceContextError as e:
        return ParseResult.error(e.code, e.args[0])


def format_traceparent(record: TraceParent) -> str | None:
    """TraceParent を traceparent ヘッダー文字列に変換する。

    いずれかの ID が無効（全ゼロ）の場合は None を返す。
    extra_fields は出力しない。
    """
    if not (is_valid_id(record.trace_id) and is_valid_id(record.parent_id)):
        return None
    return (
        f"{record.version:02x}"
        f"-{hex_from_bytes(record.trace_id)}"
        f"-{hex_from_bytes(record.parent_id)}"
        f"-{int(record.trace_flags):02x}"
    )
