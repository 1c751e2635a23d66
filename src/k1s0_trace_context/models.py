"""trace_context 設定モデル（pydantic BaseModel）"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .tracestate import MAX_MEMBERS


class TraceContextConfig(BaseModel):
    """トレースコンテキスト設定。"""

    # W3C の上限は 32 メンバー
    max_tracestate_members: int = Field(default=MAX_MEMBERS, ge=1, le=MAX_MEMBERS)
