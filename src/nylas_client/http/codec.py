# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
JSON codec for request parameters and response bodies.

Result shapes form a closed set:

- ``None`` (``NO_RESULT``): the body is ignored and ``None`` is returned.
- ``str`` (``RAW_TEXT``): the body is returned verbatim as text.
- anything else is a typed shape: dataclasses, ``list[T]``, ``dict[str, T]``,
  ``Optional``/unions, enums and the JSON scalars.

JSON ``null`` decodes to ``None`` whatever shape was requested, so callers cannot tell
"no content" apart from "null content" at this layer.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import json
import types
from collections.abc import Mapping
from enum import Enum
from functools import lru_cache
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from ..errors import DecodingError, EncodingError

T = TypeVar("T")

NO_RESULT = None
RAW_TEXT = str

_NONE_TYPE = type(None)
_LIST_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)
_DICT_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_JSON_TYPE_NAMES = {
    dict: "object",
    list: "array",
    str: "string",
    bool: "boolean",
    int: "number",
    float: "number",
}


def _to_json_value(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode(params: Mapping[str, Any]) -> bytes:
    """Serialize a parameter mapping into a compact UTF-8 JSON object body."""
    if not isinstance(params, Mapping):
        raise EncodingError(f"Request parameters must be a mapping, got {type(params).__name__}")
    for key in params:
        if not isinstance(key, str):
            raise EncodingError(f"Parameter names must be strings, got {key!r}")
    try:
        text = json.dumps(
            dict(params),
            default=_to_json_value,
            allow_nan=False,
            ensure_ascii=False,
            separators=(",", ":"),
        )
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Could not encode request parameters: {exc}") from exc
    return text.encode("utf-8")


def decode(content: bytes, result_type: type[T] | None, *, encoding: str = "utf-8") -> T | None:
    """Decode a response body into the requested result shape."""
    if result_type is NO_RESULT or result_type is _NONE_TYPE:
        return None
    if result_type is RAW_TEXT:
        try:
            return content.decode(encoding, errors="replace")  # type: ignore[return-value]
        except LookupError:
            return content.decode("utf-8", errors="replace")  # type: ignore[return-value]

    if not content.strip():
        raise DecodingError(f"Expected a JSON body for {_describe(result_type)} but the response was empty")
    try:
        data = json.loads(content)
    except ValueError as exc:
        raise DecodingError(f"Response body is not valid JSON: {exc}") from exc
    return _coerce(data, result_type, "$")


def _describe(shape: Any) -> str:
    if isinstance(shape, type) and get_origin(shape) is None:
        return shape.__name__
    return repr(shape)


def _mismatch(value: Any, shape: Any, path: str) -> DecodingError:
    found = _JSON_TYPE_NAMES.get(type(value), type(value).__name__)
    return DecodingError(f"Expected {_describe(shape)} at {path}, got JSON {found}")


@lru_cache(maxsize=256)
def _field_types(shape: type) -> dict[str, Any]:
    try:
        return get_type_hints(shape)
    except (NameError, TypeError):
        # Unresolvable forward references: fall back to whatever is not a string.
        return {f.name: f.type for f in dataclasses.fields(shape) if not isinstance(f.type, str)}


def _coerce(value: Any, shape: Any, path: str) -> Any:
    if value is None or shape is Any or shape is object:
        return value

    origin = get_origin(shape)
    if origin is Union or origin is types.UnionType:
        return _coerce_union(value, get_args(shape), path)

    if origin in _LIST_ORIGINS:
        if not isinstance(value, list):
            raise _mismatch(value, shape, path)
        args = get_args(shape)
        item_type = args[0] if args else Any
        return [_coerce(item, item_type, f"{path}[{index}]") for index, item in enumerate(value)]

    if origin in _DICT_ORIGINS:
        if not isinstance(value, dict):
            raise _mismatch(value, shape, path)
        args = get_args(shape)
        value_type = args[1] if len(args) == 2 else Any
        return {key: _coerce(item, value_type, f"{path}.{key}") for key, item in value.items()}

    if not isinstance(shape, type):
        raise DecodingError(f"Unsupported result type {shape!r} at {path}")

    if dataclasses.is_dataclass(shape):
        return _coerce_dataclass(value, shape, path)
    if issubclass(shape, Enum):
        try:
            return shape(value)
        except ValueError as exc:
            raise DecodingError(f"{value!r} at {path} is not a valid {shape.__name__}") from exc
    if shape is bool:
        if isinstance(value, bool):
            return value
        raise _mismatch(value, shape, path)
    if shape is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise _mismatch(value, shape, path)
    if shape is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise _mismatch(value, shape, path)
    if shape in (str, list, dict):
        if isinstance(value, shape):
            return value
        raise _mismatch(value, shape, path)

    raise DecodingError(f"Unsupported result type {_describe(shape)} at {path}")


def _coerce_union(value: Any, options: tuple[Any, ...], path: str) -> Any:
    failures: list[str] = []
    for option in options:
        if option is _NONE_TYPE:
            continue
        try:
            return _coerce(value, option, path)
        except DecodingError as exc:
            failures.append(str(exc))
    raise DecodingError(f"No alternative matched at {path}: {'; '.join(failures)}")


def _coerce_dataclass(value: Any, shape: type, path: str) -> Any:
    if not isinstance(value, dict):
        raise _mismatch(value, shape, path)
    hints = _field_types(shape)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(shape):
        if not f.init:
            continue
        if f.name in value:
            kwargs[f.name] = _coerce(value[f.name], hints.get(f.name, Any), f"{path}.{f.name}")
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            raise DecodingError(f"Missing required field {path}.{f.name} for {shape.__name__}")
    return shape(**kwargs)


__all__ = ["NO_RESULT", "RAW_TEXT", "decode", "encode"]
