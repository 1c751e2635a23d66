"""W3C Trace Context の遅延評価コンテキスト"""

from __future__ import annotations

from enum import Enum

import structlog

from .exceptions import TraceContextError, TraceContextErrorCodes
from .generator import IdGenerator
from .headers import (
    TRACEPARENT_HEADER,
    TRACESTATE_HEADER,
    HeaderContainer,
    iter_headers,
    new_headers,
    set_header,
)
from .logger import default_logger
from .models import TraceContextConfig
from .traceparent import (
    NULL_TRACE_PARENT,
    TraceFlags,
    TraceParent,
    format_traceparent,
    is_valid_id,
    parse_traceparent_result,
)
from .tracestate import (
    TraceState,
    add_tracestate_value,
    delete_tracestate_value,
    empty_trace_state,
    format_tracestate,
    get_tracestate_value,
    parse_tracestate,
    update_tracestate_value,
)


class ParentState(str, Enum):
    """traceparent キャッシュの状態。"""

    UNCOMPUTED = "uncomputed"
    VALID = "valid"
    # 不正な入力またはヘッダーなし。NULL_TRACE_PARENT を保持し、再パースしない
    DEGRADED = "degraded"


class TraceContext:
    """W3C Trace Context (https://www.w3.org/TR/trace-context/)。

    from_headers / from_scratch / from_trace_data のいずれかで生成する。
    traceparent は最初にフィールドへアクセスした時点でパースされ、不正な場合は
    警告をログに出した上で全ゼロの NULL_TRACE_PARENT として扱われる。
    1つのリクエスト/レスポンスの間だけ使う想定で、スレッドセーフではない。
    """

    def __init__(
        self,
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        config: TraceContextConfig | None = None,
    ) -> None:
        self._logger = logger or default_logger()
        self._config = config or TraceContextConfig()
        self._trace_parent_string = ""
        self._trace_state_string = ""
        self._parent_state = ParentState.UNCOMPUTED
        self._trace_parent = NULL_TRACE_PARENT
        self._trace_state: TraceState | None = None

    @classmethod
    def from_headers(
        cls,
        headers: HeaderContainer,
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        config: TraceContextConfig | None = None,
    ) -> TraceContext:
        """HTTP ヘッダーから TraceContext を生成する。

        名前に traceparent / tracestate を含む最後のヘッダーを保持するだけで、
        この時点では検証しない。
        """
        context = cls(logger=logger, config=config)
        for name, value in iter_headers(headers):
            lowered = name.lower()
            if TRACEPARENT_HEADER in lowered:
                context._trace_parent_string = value
            if TRACESTATE_HEADER in lowered:
                context._trace_state_string = value
        return context

    @classmethod
    def from_scratch(
        cls,
        generator: IdGenerator,
        sampled: bool = False,
        state: TraceState | None = None,
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        config: TraceContextConfig | None = None,
    ) -> TraceContext:
        """新しいトレースID・スパンIDで version 0 の TraceContext を生成する。"""
        context = cls(logger=logger, config=config)
        context._set_trace_parent(
            TraceParent(
                version=0,
                trace_id=generator.generate_trace_id_bytes(),
                parent_id=generator.generate_span_id_bytes(),
                sampled=sampled,
            )
        )
        context._trace_state = list(state) if state is not None else empty_trace_state()
        return context

    @classmethod
    def from_trace_data(
        cls,
        trace_parent: TraceParent,
        state: TraceState | None = None,
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        config: TraceContextConfig | None = None,
    ) -> TraceContext:
        """検証済みの TraceParent から TraceContext を生成する。

        Raises:
            TraceContextError: いずれかの ID が無効な場合 (INVALID)
        """
        if not is_valid_id(trace_parent.trace_id):
            raise TraceContextError(
                code=TraceContextErrorCodes.INVALID,
                message="Invalid trace ID",
            )
        if not is_valid_id(trace_parent.parent_id):
            raise TraceContextError(
                code=TraceContextErrorCodes.INVALID,
                message="Invalid parent ID",
            )
        context = cls(logger=logger, config=config)
        context._set_trace_parent(trace_parent)
        context._trace_state = list(state) if state is not None else empty_trace_state()
        return context

    def _set_trace_parent(self, trace_parent: TraceParent) -> None:
        self._trace_parent = trace_parent
        self._parent_state = ParentState.VALID

    def _clear_trace_parent(self) -> None:
        self._trace_parent_string = ""
        self._trace_parent = NULL_TRACE_PARENT
        self._parent_state = ParentState.DEGRADED

    def _resolve_trace_parent(self) -> TraceParent:
        if self._parent_state is not ParentState.UNCOMPUTED:
            return self._trace_parent
        if not self._trace_parent_string:
            self._logger.debug("no traceparent header")
            self._clear_trace_parent()
            return self._trace_parent

        try:
            result = parse_traceparent_result(self._trace_parent_string)
        except Exception:
            self._logger.exception(
                "unexpected error processing traceparent",
                traceparent=self._trace_parent_string,
            )
            self._clear_trace_parent()
            return self._trace_parent

        if result.value is not None:
            self._set_trace_parent(result.value)
        else:
            # UNPARSEABLE / INVALID のどちらでも上流トレースなしとして扱う
            self._logger.warning(
                "invalid traceparent",
                traceparent=self._trace_parent_string,
                code=result.error_code,
                reason=result.message,
            )
            self._clear_trace_parent()
        return self._trace_parent

    def _resolve_trace_state(self) -> TraceState:
        if self._trace_state is None:
            if self._trace_state_string == "":
                self._trace_state = empty_trace_state()
            else:
                self._trace_state = parse_tracestate(
                    self._trace_state_string,
                    max_members=self._config.max_tracestate_members,
                )
        return self._trace_state

    @property
    def parent_state(self) -> ParentState:
        """traceparent キャッシュの現在の状態。アクセスしてもパースは起きない。"""
        return self._parent_state

    @property
    def trace_parent(self) -> TraceParent:
        return self._resolve_trace_parent()

    @property
    def version(self) -> int:
        return self._resolve_trace_parent().version

    @property
    def trace_id(self) -> bytes:
        return self._resolve_trace_parent().trace_id

    @property
    def parent_id(self) -> bytes:
        return self._resolve_trace_parent().parent_id

    @property
    def sampled(self) -> bool:
        return self._resolve_trace_parent().sampled

    @property
    def trace_flags(self) -> TraceFlags:
        return self._resolve_trace_parent().trace_flags

    @property
    def extra_fields(self) -> tuple[str, ...]:
        """version != 0 のヘッダーに含まれていた追加フィールド。"""
        return self._resolve_trace_parent().extra_fields

    @property
    def trace_state(self) -> TraceState:
        """現在の tracestate のコピー。"""
        return list(self._resolve_trace_state())

    def get_trace_state_value(self, key: str) -> str | None:
        return get_tracestate_value(self._resolve_trace_state(), key)

    def add_trace_state_value(self, key: str, value: str) -> None:
        self._trace_state = add_tracestate_value(self._resolve_trace_state(), key, value)

    def update_trace_state_value(self, key: str, value: str) -> None:
        self._trace_state = update_tracestate_value(self._resolve_trace_state(), key, value)

    def delete_trace_state_value(self, key: str) -> None:
        self._trace_state = delete_tracestate_value(self._resolve_trace_state(), key)

    def to_headers(self, headers: HeaderContainer | None = None) -> HeaderContainer:
        """traceparent / tracestate ヘッダーをセットしたヘッダーコンテナを返す。

        headers を渡した場合はそれを直接更新して返す。tracestate が空、
        または ID が無効な場合は該当ヘッダーをセットしない。
        """
        if headers is None:
            headers = new_headers()

        state = self._resolve_trace_state()
        if state:
            set_header(headers, TRACESTATE_HEADER, format_tracestate(state))

        traceparent = format_traceparent(self._resolve_trace_parent())
        if traceparent is not None:
            set_header(headers, TRACEPARENT_HEADER, traceparent)

        return headers
