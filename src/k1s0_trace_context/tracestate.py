"""W3C tracestate リストの操作（opentelemetry.trace.TraceState のラッパー）"""

from __future__ import annotations

from opentelemetry.trace import TraceState as OtelTraceState

from .exceptions import TraceContextError, TraceContextErrorCodes

MAX_MEMBERS = 32

# 先頭が最新。キーは一意
TraceState = list[tuple[str, str]]


def empty_trace_state() -> TraceState:
    return []


def _to_otel(state: TraceState) -> OtelTraceState:
    return OtelTraceState(state)


def _from_otel(otel_state: OtelTraceState) -> TraceState:
    return list(otel_state.items())


def is_valid_member(key: str, value: str) -> bool:
    """key=value が W3C tracestate のメンバーとして正しければ True。"""
    return key in OtelTraceState().add(key, value)


def parse_tracestate(header: str, max_members: int = MAX_MEMBERS) -> TraceState:
    """tracestate ヘッダー文字列を TraceState に変換する。

    不正なメンバーや重複キーを含む場合、または 32 メンバーを超える場合は
    ヘッダー全体を捨てて空の TraceState を返す。例外は送出しない。
    """
    return _from_otel(OtelTraceState.from_header([header]))[:max_members]


def format_tracestate(state: TraceState) -> str:
    return _to_otel(state).to_header()


def get_tracestate_value(state: TraceState, key: str) -> str | None:
    return _to_otel(state).get(key)


def add_tracestate_value(state: TraceState, key: str, value: str) -> TraceState:
    """key=value を先頭に追加した新しい TraceState を返す。

    同じキーが既に存在する場合は取り除いてから追加する。

    Raises:
        TraceContextError: key/value が不正、またはメンバー数が上限を超える場合 (INVALID)
    """
    if not is_valid_member(key, value):
        raise TraceContextError(
            code=TraceContextErrorCodes.INVALID,
            message=f"Invalid tracestate member: {key!r}={value!r}",
        )
    otel_state = _to_otel(state)
    if key in otel_state:
        otel_state = otel_state.delete(key)
    added = otel_state.add(key, value)
    if key not in added:
        raise TraceContextError(
            code=TraceContextErrorCodes.INVALID,
            message=f"tracestate cannot hold more than {MAX_MEMBERS} members",
        )
    return _from_otel(added)


def update_tracestate_value(state: TraceState, key: str, value: str) -> TraceState:
    """既存のキーの値を更新し、先頭に移動した新しい TraceState を返す。

    キーが存在しない場合は state をそのまま返す。
    """
    if not is_valid_member(key, value):
        raise TraceContextError(
            code=TraceContextErrorCodes.INVALID,
            message=f"Invalid tracestate member: {key!r}={value!r}",
        )
    if get_tracestate_value(state, key) is None:
        return state
    return add_tracestate_value(state, key, value)


def delete_tracestate_value(state: TraceState, key: str) -> TraceState:
    otel_state = _to_otel(state)
    if key not in otel_state:
        return list(state)
    return _from_otel(otel_state.delete(key))
