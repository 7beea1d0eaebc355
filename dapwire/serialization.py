"""JSON encoding and decoding of protocol values and structured types."""

from __future__ import annotations

import dataclasses
import functools
import json
import math
from typing import Any, Callable, Iterable, Union

from dapwire.types import Kind, kind_of

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class DeserializeError(ValueError):
    """Raised when data cannot be decoded into the requested value."""


class Struct:
    """Base class of the dataclasses that a StructType generates."""

    _struct_type: "StructType | None" = None


Decoder = Union[Callable[[Any], Any], "StructType", None]


@dataclasses.dataclass(frozen=True)
class Field:
    """One field of a structured type.

    ``name`` is the Python attribute, ``key`` the JSON key (defaults to
    ``name``). ``decode`` is a converter, a StructType, or None for a value
    of any kind. Optional fields hold None when unset and are left out of
    the encoded object.
    """

    name: str
    key: str | None = None
    decode: Decoder = None
    optional: bool = False

    def __post_init__(self) -> None:
        if self.key is None:
            object.__setattr__(self, "key", self.name)


class StructType:
    """A named structured type with typed, JSON-keyed fields."""

    def __init__(self, name: str, wire_name: str = "", fields: Iterable[Field] = ()) -> None:
        self.name = name
        self.wire_name = wire_name
        self.fields: tuple[Field, ...] = tuple(fields)
        seen_names: set[str] = set()
        seen_keys: set[str] = set()
        for f in self.fields:
            if f.name in seen_names or f.key in seen_keys:
                raise ValueError(f"{name}: duplicate field '{f.name}'")
            seen_names.add(f.name)
            seen_keys.add(f.key)
        spec = [
            (f.name, Any, dataclasses.field(default_factory=_default_factory(f)))
            for f in self.fields
        ]
        self.cls = dataclasses.make_dataclass(name, spec, bases=(Struct,), kw_only=True)
        self.cls._struct_type = self

    def __repr__(self) -> str:
        return f"StructType({self.name!r}, {self.wire_name!r})"

    def create(self, **kwargs: Any) -> Struct:
        """Return a new instance; unset fields take their defaults."""
        return self.cls(**kwargs)

    def serialize(self, value: Struct) -> dict[str, Any]:
        """Encode an instance of this type as a JSON-ready dict."""
        if not isinstance(value, self.cls):
            raise TypeError(f"expected {self.name}, got {type(value).__name__}")
        out: dict[str, Any] = {}
        for f in self.fields:
            item = getattr(value, f.name)
            if item is None and f.optional:
                continue
            out[f.key] = encode(item)
        return out

    def deserialize(self, data: Any) -> Struct:
        """Decode a JSON object (or JSON text) into an instance of this type."""
        if isinstance(data, (str, bytes, bytearray)):
            data = parse_json(data)
        if not isinstance(data, dict):
            raise DeserializeError(f"{self.name}: expected an object")
        values: dict[str, Any] = {}
        for f in self.fields:
            if f.key not in data:
                if f.optional:
                    values[f.name] = None
                    continue
                raise DeserializeError(f"{self.name}: missing field '{f.key}'")
            raw = data[f.key]
            if raw is None and f.optional:
                values[f.name] = None
                continue
            try:
                values[f.name] = _decode(f.decode, raw)
            except DeserializeError as err:
                raise DeserializeError(f"{self.name}.{f.key}: {err}") from err
        return self.cls(**values)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def parse_json(text: str | bytes | bytearray) -> Any:
    """Parse JSON text; raise DeserializeError if it is not valid JSON."""
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as err:
            raise DeserializeError(f"invalid UTF-8: {err}") from err
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as err:
        raise DeserializeError(f"invalid JSON: {err}") from err


def dumps(value: Any) -> str:
    """Encode a protocol value as compact JSON text."""
    return json.dumps(encode(value), separators=(",", ":"), ensure_ascii=False)


def to_boolean(value: Any) -> bool:
    """Decode a JSON boolean."""
    if not isinstance(value, bool):
        raise DeserializeError(f"expected a boolean, got {_describe(value)}")
    return value


def to_integer(value: Any) -> int:
    """Decode a JSON integer that fits in 64 signed bits."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise DeserializeError(f"expected an integer, got {_describe(value)}")
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise DeserializeError(f"integer {value} is out of range")
    return value


def to_number(value: Any) -> float:
    """Decode a JSON number, integer or not."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DeserializeError(f"expected a number, got {_describe(value)}")
    return float(value)


def to_string(value: Any) -> str:
    """Decode a JSON string."""
    if not isinstance(value, str):
        raise DeserializeError(f"expected a string, got {_describe(value)}")
    return value


def to_object(value: Any) -> dict[str, Any]:
    """Decode a JSON object whose members may be of any kind."""
    if not isinstance(value, dict):
        raise DeserializeError(f"expected an object, got {_describe(value)}")
    return {_object_key(k): _to_any(v) for k, v in value.items()}


def to_array(value: Any, item: Decoder = None) -> list[Any]:
    """Decode a JSON array, decoding each element with ``item``."""
    if not isinstance(value, list):
        raise DeserializeError(f"expected an array, got {_describe(value)}")
    return [_decode(item, element) for element in value]


def encode(value: Any) -> Any:
    """Turn a protocol value into plain JSON-ready Python data."""
    kind = kind_of(value)
    if kind in (Kind.NULL, Kind.BOOLEAN, Kind.STRING):
        return value
    if kind is Kind.INTEGER:
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ValueError(f"integer {value} is out of range")
        return int(value)
    if kind is Kind.NUMBER:
        return float(value) if math.isfinite(value) else None
    if kind is Kind.ARRAY:
        return [encode(item) for item in value]
    if kind is Kind.OBJECT:
        out: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"object keys must be strings, got {type(key).__name__}")
            out[key] = encode(item)
        return out
    struct_type = getattr(type(value), "_struct_type", None)
    if isinstance(struct_type, StructType):
        return struct_type.serialize(value)
    return {f.name: encode(getattr(value, f.name)) for f in dataclasses.fields(value)}


def _object_key(key: Any) -> str:
    if not isinstance(key, str):
        raise DeserializeError(f"object keys must be strings, got {_describe(key)}")
    return key


def _to_any(value: Any) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value
    if isinstance(value, list):
        return [_to_any(item) for item in value]
    if isinstance(value, dict):
        return to_object(value)
    raise DeserializeError(f"not a JSON value: {_describe(value)}")


def _decode(decoder: Decoder, value: Any) -> Any:
    if decoder is None:
        return _to_any(value)
    if isinstance(decoder, StructType):
        return decoder.deserialize(value)
    return decoder(value)


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


_SIMPLE_DEFAULTS: dict[Callable[[Any], Any], Callable[[], Any]] = {
    to_boolean: bool,
    to_integer: int,
    to_number: float,
    to_string: str,
    to_object: dict,
}


def _default_factory(f: Field) -> Callable[[], Any]:
    if f.optional:
        return lambda: None
    decoder = f.decode
    if isinstance(decoder, StructType):
        return decoder.create
    if isinstance(decoder, functools.partial) and decoder.func is to_array:
        return list
    if decoder is to_array:
        return list
    if decoder is not None and decoder in _SIMPLE_DEFAULTS:
        return _SIMPLE_DEFAULTS[decoder]
    return lambda: None