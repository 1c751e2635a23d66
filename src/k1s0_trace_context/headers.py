"""HTTP ヘッダーコンテナへのアクセス"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Protocol

import httpx

TRACEPARENT_HEADER = "traceparent"
TRACESTATE_HEADER = "tracestate"


class HeaderContainer(Protocol):
    """ヘッダーコンテナプロトコル。httpx.Headers と dict が満たす。"""

    def items(self) -> Iterable[tuple[str, str]]: ...

    def __setitem__(self, key: str, value: str) -> None: ...

    def __contains__(self, key: object) -> bool: ...


def new_headers() -> httpx.Headers:
    return httpx.Headers()


def iter_headers(headers: HeaderContainer) -> Iterator[tuple[str, str]]:
    """全てのヘッダーエントリを (name, value) で列挙する。

    httpx.Headers のように同名ヘッダーを複数持てるコンテナでは各エントリを個別に返す。
    """
    multi_items = getattr(headers, "multi_items", None)
    if callable(multi_items):
        yield from multi_items()
    else:
        yield from headers.items()


def set_header(headers: HeaderContainer, name: str, value: str) -> None:
    """大文字小文字を区別せずにヘッダーをセットする。"""
    if isinstance(headers, dict):
        # dict は大文字小文字を区別するため表記揺れのキーを取り除く
        for existing in [k for k in headers if k.lower() == name.lower()]:
            del headers[existing]
    headers[name] = value
