"""Context propagation helpers."""

from __future__ import annotations

import structlog

from .context import TraceContext
from .headers import HeaderContainer
from .models import TraceContextConfig


def inject_context(headers: HeaderContainer, ctx: TraceContext) -> HeaderContainer:
    return ctx.to_headers(headers)


def extract_context(
    headers: HeaderContainer,
    *,
    logger: structlog.stdlib.BoundLogger | None = None,
    config: TraceContextConfig | None = None,
) -> TraceContext:
    return TraceContext.from_headers(headers, logger=logger, config=config)
