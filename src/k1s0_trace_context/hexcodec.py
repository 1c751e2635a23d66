"""16進数文字列とバイト列の相互変換"""

from __future__ import annotations

import binascii


def bytes_from_hex(hexstring: str) -> bytes:
    """16進数文字列をビッグエンディアンのバイト列に変換する。

    奇数長の場合は先頭に "0" を補う。16進数以外の文字を含む場合は ValueError。
    """
    if len(hexstring) % 2 != 0:
        hexstring = f"0{hexstring}"
    try:
        return binascii.unhexlify(hexstring)
    except ValueError as e:
        raise ValueError(f"Invalid hex string: {hexstring!r}") from e


def hex_from_bytes(buffer: bytes) -> str:
    """バイト列を小文字の16進数文字列に変換する。"""
    return buffer.hex()
