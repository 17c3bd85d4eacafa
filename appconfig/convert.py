from __future__ import annotations
"""Conversion between settings values and plain mappings."""

import dataclasses
import types
import typing
from collections.abc import Mapping, MutableMapping
from typing import Any

from .errors import DeserializationError, SerializationError

_SCALARS = (bool, int, float, str)


def to_mapping(value: Any) -> dict[str, Any]:
    """Return ``value`` as a plain ``dict`` suitable for a codec.

    Dataclasses become tables, tuples become lists. Fields declared with
    ``init=False`` are derived state and are not written. Objects that are neither
    dataclasses nor mappings must provide ``to_dict()``.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: _plain(getattr(value, field.name))
            for field in dataclasses.fields(value)
            if field.init
        }
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        data = to_dict()
        if not isinstance(data, Mapping):
            raise SerializationError(f"{type(value).__name__}.to_dict() did not return a mapping")
        return {str(key): _plain(item) for key, item in data.items()}
    raise SerializationError(f"Unsupported settings type: {type(value).__name__}")


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_mapping(value)
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def from_mapping(cls: type, data: Mapping[str, Any]) -> Any:
    """Build an instance of ``cls`` from a decoded mapping.

    Raises:
        DeserializationError: when ``data`` does not fit ``cls``.
    """
    if not isinstance(data, Mapping):
        raise DeserializationError(f"Expected a table for {cls.__name__}, got {type(data).__name__}")
    if dataclasses.is_dataclass(cls):
        return _build_dataclass(cls, data)
    if issubclass(cls, MutableMapping):
        instance = cls()
        instance.update(data)
        return instance
    from_dict = getattr(cls, "from_dict", None)
    if callable(from_dict):
        try:
            return from_dict(dict(data))
        except (KeyError, TypeError, ValueError) as exc:
            raise DeserializationError(f"{cls.__name__}.from_dict() failed: {exc}") from exc
    raise DeserializationError(f"Unsupported settings type: {cls.__name__}")


def _build_dataclass(cls: type, data: Mapping[str, Any]) -> Any:
    fields = {field.name: field for field in dataclasses.fields(cls) if field.init}
    unknown = sorted(set(data) - set(fields))
    if unknown:
        raise DeserializationError(f"Unknown field(s) for {cls.__name__}: {', '.join(unknown)}")
    hints = typing.get_type_hints(cls)
    kwargs = {name: _coerce(hints.get(name, Any), value) for name, value in data.items()}
    try:
        return cls(**kwargs)
    except (TypeError, ValueError) as exc:
        raise DeserializationError(f"Unable to build {cls.__name__}: {exc}") from exc


def _coerce(hint: Any, value: Any) -> Any:
    origin = typing.get_origin(hint)
    args = typing.get_args(hint)

    if origin in (typing.Union, types.UnionType):
        if value is None:
            return None
        options = [arg for arg in args if arg is not type(None)]
        if len(options) == 1:
            return _coerce(options[0], value)
        return value

    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return from_mapping(hint, value)

    if origin is tuple or hint is tuple:
        if not isinstance(value, (list, tuple)):
            raise DeserializationError(f"Expected an array, got {type(value).__name__}")
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_coerce(args[0], item) for item in value)
        if args:
            if len(args) != len(value):
                raise DeserializationError(f"Expected {len(args)} item(s), got {len(value)}")
            return tuple(_coerce(arg, item) for arg, item in zip(args, value))
        return tuple(value)

    if origin is list:
        if not isinstance(value, list):
            raise DeserializationError(f"Expected an array, got {type(value).__name__}")
        item_hint = args[0] if args else Any
        return [_coerce(item_hint, item) for item in value]

    if origin is dict:
        if not isinstance(value, Mapping):
            raise DeserializationError(f"Expected a table, got {type(value).__name__}")
        key_hint, value_hint = args if len(args) == 2 else (Any, Any)
        return {_coerce_key(key_hint, key): _coerce(value_hint, item) for key, item in value.items()}

    if hint in _SCALARS:
        return _coerce_scalar(hint, value)

    return value


def _coerce_scalar(hint: type, value: Any) -> Any:
    # bool is an int subclass; keep the two apart.
    if isinstance(value, bool) and hint is not bool:
        raise DeserializationError(f"Expected {hint.__name__}, got bool")
    if hint is float and isinstance(value, int):
        return float(value)
    if not isinstance(value, hint):
        raise DeserializationError(f"Expected {hint.__name__}, got {type(value).__name__}")
    return value


def _coerce_key(hint: Any, key: Any) -> Any:
    # Table keys are always strings on disk.
    if hint in (int, float) and isinstance(key, str):
        try:
            return hint(key)
        except ValueError as exc:
            raise DeserializationError(f"Expected {hint.__name__} key, got {key!r}") from exc
    return _coerce(hint, key)


def assign(target: Any, source: Any) -> None:
    """Copy the state of ``source`` into ``target`` in place."""
    if dataclasses.is_dataclass(target) and not isinstance(target, type):
        for field in dataclasses.fields(target):
            setattr(target, field.name, getattr(source, field.name))
    elif isinstance(target, MutableMapping):
        target.clear()
        target.update(source)
    elif hasattr(target, "__dict__"):
        vars(target).clear()
        vars(target).update(vars(source))
    else:
        raise TypeError(f"Cannot update {type(target).__name__} in place")
