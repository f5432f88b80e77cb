"""Conversion between human-readable and canonical addresses."""

from __future__ import annotations

from typing import Any

from scrtkit.std import CanonicalAddr, HumanAddr


def canonize_maybe_empty(api: Any, addr: HumanAddr) -> CanonicalAddr:
    """Canonize ``addr``, mapping the empty address to empty bytes without asking ``api``."""
    if addr == "":
        return b""
    return api.canonical_address(addr)


def humanize_maybe_empty(api: Any, addr: CanonicalAddr) -> HumanAddr:
    """Humanize ``addr``, mapping empty bytes to the empty address without asking ``api``."""
    if len(addr) == 0:
        return ""
    return api.human_address(bytes(addr))


def canonize(value: Any, api: Any) -> Any:
    """Canonize an address, a list or tuple of them, ``None``, or an object with ``canonize``."""
    if value is None:
        return None
    if isinstance(value, str):
        return canonize_maybe_empty(api, value)
    if isinstance(value, list):
        return [canonize(item, api) for item in value]
    if isinstance(value, tuple):
        return tuple(canonize(item, api) for item in value)
    method = getattr(value, "canonize", None)
    if callable(method):
        return method(api)
    raise TypeError(f"cannot canonize a value of type {type(value).__name__}")


def humanize(value: Any, api: Any) -> Any:
    """Humanize an address, a list or tuple of them, ``None``, or an object with ``humanize``."""
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return humanize_maybe_empty(api, value)
    if isinstance(value, list):
        return [humanize(item, api) for item in value]
    if isinstance(value, tuple):
        return tuple(humanize(item, api) for item in value)
    method = getattr(value, "humanize", None)
    if callable(method):
        return method(api)
    raise TypeError(f"cannot humanize a value of type {type(value).__name__}")