"""
Strict decoding of wire payloads into frozen model records.

Models are dataclasses deriving from :class:`WireRecord`; each field declares
its :class:`~stripe_payments.core.codecs.ScalarCodec` through :func:`wire_field`.
A field without a default is required. Decoding walks every field once and
reports all mismatches together in a single
:class:`~stripe_payments.core.errors.ModelDecodeError`.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from .codecs import ScalarCodec, json_kind
from .errors import ModelDecodeError
from .params import PostParams, flatten

__all__ = [
    "FieldReader",
    "WireRecord",
    "loads_object",
    "nested",
    "wire_field",
]

R = TypeVar("R", bound="WireRecord")


def wire_field(codec: Any, *, optional: bool = False) -> Any:
    metadata = {"codec": codec}
    if optional:
        return dataclasses.field(default=None, metadata=metadata)
    return dataclasses.field(metadata=metadata)


def _unsupported_form_value(raw: str) -> Any:
    raise TypeError("nested objects cannot be read from form parameters")


def nested(record_cls: Type["WireRecord"]) -> ScalarCodec:
    """Codec for a field that holds another record."""
    return ScalarCodec(
        record_cls.__name__,
        record_cls.from_json,
        _unsupported_form_value,
        lambda value: value.to_json(),
    )


def loads_object(body: bytes) -> Dict[str, Any]:
    """Parse ``body`` as a JSON object or raise :class:`ModelDecodeError`."""
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, ValueError):
        raise ModelDecodeError([("", "body is not valid JSON")]) from None
    except RecursionError:
        raise ModelDecodeError([("", "body is too deeply nested")]) from None
    if not isinstance(payload, dict):
        raise ModelDecodeError([("", f"expected object, got {json_kind(payload)}")])
    return payload


class FieldReader:
    """
    Reads named fields out of one decoded object, collecting errors.

    With ``form=True`` the values are form parameter strings and are parsed
    with each codec's ``from_wire`` instead of ``from_json``.
    """

    def __init__(self, payload: Any, *, form: bool = False) -> None:
        self.errors: List[Tuple[str, str]] = []
        self._form = form
        if isinstance(payload, Mapping):
            self._payload: Mapping[str, Any] = payload
        else:
            self._payload = {}
            self.errors.append(("", f"expected object, got {json_kind(payload)}"))

    def required(self, key: str, codec: ScalarCodec) -> Any:
        if self._payload.get(key) is None:
            self.errors.append((f"/{key}", "missing required field"))
            return None
        return self._decode(key, codec)

    def optional(self, key: str, codec: ScalarCodec) -> Any:
        if self._payload.get(key) is None:
            return None
        return self._decode(key, codec)

    def _decode(self, key: str, codec: ScalarCodec) -> Any:
        path = f"/{key}"
        decode = codec.from_wire if self._form else codec.from_json
        try:
            return decode(self._payload[key])
        except ModelDecodeError as exc:
            self.errors.extend((path + inner, reason) for inner, reason in exc.errors)
        except (TypeError, ValueError) as exc:
            self.errors.append((path, str(exc)))
        return None

    def finish(self) -> None:
        if self.errors:
            raise ModelDecodeError(self.errors)


class WireRecord:
    """Mixin giving a frozen dataclass its JSON and form codecs."""

    # Written as the ``object`` member of the JSON form when set.
    object_name: ClassVar[Optional[str]] = None

    @classmethod
    def _wire_fields(cls) -> Tuple[dataclasses.Field, ...]:
        return tuple(f for f in dataclasses.fields(cls) if "codec" in f.metadata)

    @classmethod
    def _read(cls: Type[R], reader: FieldReader) -> R:
        values: Dict[str, Any] = {}
        for f in cls._wire_fields():
            codec = f.metadata["codec"]
            if f.default is dataclasses.MISSING:
                values[f.name] = reader.required(f.name, codec)
            else:
                values[f.name] = reader.optional(f.name, codec)
        reader.finish()
        try:
            return cls(**values)
        except ValueError as exc:
            raise ModelDecodeError([("", str(exc))]) from None

    @classmethod
    def from_json(cls: Type[R], payload: Any) -> R:
        return cls._read(FieldReader(payload))

    @classmethod
    def from_params(cls: Type[R], params: Mapping[str, str]) -> R:
        unexpected = sorted(set(params) - {f.name for f in cls._wire_fields()})
        reader = FieldReader(params, form=True)
        reader.errors.extend((f"/{key}", "unexpected parameter") for key in unexpected)
        return cls._read(reader)

    def to_json(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.object_name is not None:
            payload["object"] = self.object_name
        for f in self._wire_fields():
            value = getattr(self, f.name)
            if value is not None:
                payload[f.name] = f.metadata["codec"].to_json(value)
        return payload

    def to_params(self) -> PostParams:
        return flatten({f.name: getattr(self, f.name) for f in self._wire_fields()})
