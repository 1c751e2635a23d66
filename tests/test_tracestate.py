"""tracestate 操作のユニットテスト"""

import pytest
from k1s0_trace_context.exceptions import TraceContextError, TraceContextErrorCodes
from k1s0_trace_context.tracestate import (
    add_tracestate_value,
    delete_tracestate_value,
    empty_trace_state,
    format_tracestate,
    get_tracestate_value,
    is_valid_member,
    parse_tracestate,
    update_tracestate_value,
)


def test_parse_keeps_order() -> None:
    assert parse_tracestate("foo=1,bar=2") == [("foo", "1"), ("bar", "2")]


def test_parse_empty() -> None:
    assert parse_tracestate("") == []
    assert empty_trace_state() == []


def test_parse_trims_whitespace_and_empty_members() -> None:
    assert parse_tracestate(" foo=1 ,, \tbar=2\t,") == [("foo", "1"), ("bar", "2")]


def test_parse_multi_tenant_key() -> None:
    assert parse_tracestate("tenant@vendor=abc") == [("tenant@vendor", "abc")]


@pytest.mark.parametrize("member", ["Foo=1", "novalue", "bar=", "baz=a=b"])
def test_parse_discards_header_with_invalid_member(member: str) -> None:
    """不正なメンバーを含むヘッダーは全体が捨てられること。"""
    assert parse_tracestate(f"ok=2,{member}") == []


def test_parse_discards_duplicate_keys() -> None:
    assert parse_tracestate("foo=1,foo=2") == []


def test_parse_discards_more_than_32_members() -> None:
    header = ",".join(f"k{i}=v{i}" for i in range(33))
    assert parse_tracestate(header) == []


def test_parse_accepts_32_members() -> None:
    header = ",".join(f"k{i}=v{i}" for i in range(32))
    assert len(parse_tracestate(header)) == 32


def test_parse_truncates_to_max_members() -> None:
    header = ",".join(f"k{i}=v{i}" for i in range(5))
    assert parse_tracestate(header, max_members=3) == [("k0", "v0"), ("k1", "v1"), ("k2", "v2")]


def test_format() -> None:
    assert format_tracestate([("foo", "1"), ("bar", "2")]) == "foo=1,bar=2"
    assert format_tracestate([]) == ""


def test_get_value() -> None:
    state = parse_tracestate("foo=1,bar=2")
    assert get_tracestate_value(state, "bar") == "2"
    assert get_tracestate_value(state, "baz") is None


def test_add_prepends() -> None:
    state = add_tracestate_value([("foo", "1")], "baz", "3")
    assert state == [("baz", "3"), ("foo", "1")]


def test_add_existing_key_moves_to_front() -> None:
    state = add_tracestate_value([("foo", "1"), ("bar", "2")], "bar", "9")
    assert state == [("bar", "9"), ("foo", "1")]


def test_add_does_not_mutate_input() -> None:
    original = [("foo", "1")]
    add_tracestate_value(original, "bar", "2")
    assert original == [("foo", "1")]


def test_update_existing_key() -> None:
    state = update_tracestate_value([("foo", "1"), ("bar", "2")], "bar", "3")
    assert state == [("bar", "3"), ("foo", "1")]


def test_update_missing_key_is_noop() -> None:
    state = [("foo", "1")]
    assert update_tracestate_value(state, "bar", "3") == [("foo", "1")]


def test_delete() -> None:
    state = delete_tracestate_value([("foo", "1"), ("bar", "2")], "foo")
    assert state == [("bar", "2")]
    assert delete_tracestate_value(state, "missing") == [("bar", "2")]


@pytest.mark.parametrize(
    ("key", "value"),
    [("Foo", "1"), ("", "1"), ("foo", ""), ("foo", "a,b"), ("foo", "a=b"), ("foo", "trailing ")],
)
def test_add_rejects_invalid_member(key: str, value: str) -> None:
    with pytest.raises(TraceContextError) as exc_info:
        add_tracestate_value([], key, value)
    assert exc_info.value.code == TraceContextErrorCodes.INVALID


def test_add_rejects_member_over_limit() -> None:
    state = [(f"k{i}", f"v{i}") for i in range(32)]
    with pytest.raises(TraceContextError) as exc_info:
        add_tracestate_value(state, "extra", "1")
    assert exc_info.value.code == TraceContextErrorCodes.INVALID


def test_add_existing_key_at_limit() -> None:
    """上限に達していても既存キーの再追加はできること。"""
    state = [(f"k{i}", f"v{i}") for i in range(32)]
    result = add_tracestate_value(state, "k31", "new")
    assert len(result) == 32
    assert result[0] == ("k31", "new")


def test_is_valid_member() -> None:
    assert is_valid_member("tenant@vendor", "abc")
    assert not is_valid_member("Foo", "1")
    assert not is_valid_member("foo", "a,b")
