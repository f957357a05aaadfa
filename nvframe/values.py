"""Conversion of loosely typed setting values into typed settings.

Each function takes the current setting value and an incoming value; it
returns the converted value, or the current one (after logging an error)
when the incoming value has the wrong type.
"""

from __future__ import annotations

import logging
from typing import Any

log = logging.getLogger(__name__)

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U64_MAX = 2**64 - 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_i64(value: Any) -> bool:
    return _is_int(value) and _I64_MIN <= value <= _I64_MAX


def _is_u64(value: Any) -> bool:
    return _is_int(value) and 0 <= value <= _U64_MAX


def _wrap_signed(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) % (1 << bits)) - half


def float_from_value(current: float, value: Any) -> float:
    if isinstance(value, float):
        return value
    if _is_i64(value) or _is_u64(value):
        return float(value)
    log.error("Setting expected an f32, but received %r", value)
    return current


def u64_from_value(current: int, value: Any) -> int:
    if _is_u64(value):
        return value
    log.error("Setting expected a u64, but received %r", value)
    return current


def u32_from_value(current: int, value: Any) -> int:
    if _is_u64(value):
        return value & 0xFFFFFFFF
    log.error("Setting expected a u32, but received %r", value)
    return current


def i32_from_value(current: int, value: Any) -> int:
    if _is_i64(value):
        return _wrap_signed(value, 32)
    log.error("Setting expected an i32, but received %r", value)
    return current


def str_from_value(current: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    log.error("Setting expected a string, but received %r", value)
    return current


def bool_from_value(current: bool, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if _is_u64(value):
        return value != 0
    log.error("Setting expected a bool or 0/1, but received %r", value)
    return current