"""k1s0 trace context library."""

from .context import ParentState, TraceContext
from .exceptions import TraceContextError, TraceContextErrorCodes
from .generator import IdGenerator, RandomIdGenerator
from .headers import TRACEPARENT_HEADER, TRACESTATE_HEADER, HeaderContainer
from .hexcodec import bytes_from_hex, hex_from_bytes
from .models import TraceContextConfig
from .propagation import extract_context, inject_context
from .traceparent import (
    NULL_TRACE_PARENT,
    ParseResult,
    TraceFlags,
    TraceParent,
    format_traceparent,
    is_valid_id,
    null_trace_parent,
    parse_traceparent,
    parse_traceparent_result,
)
from .tracestate import (
    TraceState,
    add_tracestate_value,
    delete_tracestate_value,
    empty_trace_state,
    format_tracestate,
    get_tracestate_value,
    is_valid_member,
    parse_tracestate,
    update_tracestate_value,
)

__all__ = [
    "TraceContext",
    "ParentState",
    "TraceParent",
    "TraceFlags",
    "ParseResult",
    "NULL_TRACE_PARENT",
    "null_trace_parent",
    "is_valid_id",
    "parse_traceparent",
    "parse_traceparent_result",
    "format_traceparent",
    "TraceState",
    "empty_trace_state",
    "parse_tracestate",
    "format_tracestate",
    "get_tracestate_value",
    "is_valid_member",
    "add_tracestate_value",
    "update_tracestate_value",
    "delete_tracestate_value",
    "IdGenerator",
    "RandomIdGenerator",
    "HeaderContainer",
    "TRACEPARENT_HEADER",
    "TRACESTATE_HEADER",
    "bytes_from_hex",
    "hex_from_bytes",
    "TraceContextConfig",
    "extract_context",
    "inject_context",
    "TraceContextError",
    "TraceContextErrorCodes",
]
