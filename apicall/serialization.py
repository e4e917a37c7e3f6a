# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""JSON serialization of call bodies and response payloads.

Values are validated and dumped with pydantic, so a payload type may be a
pydantic model, a standard library dataclass, a container of those, or a
plain JSON type. When a :class:`~apicall.dates.DateFormat` is given, every
``date`` and ``datetime`` in the payload is rendered and parsed with it;
otherwise pydantic's ISO 8601 representation is used in both directions.
"""

import collections.abc
import dataclasses
import datetime
import functools
import json
import types
import typing
from typing import Any, Optional

import pydantic
import pydantic_core

from apicall import exceptions
from apicall.dates import DateFormat

_SEQUENCE_ORIGINS = (
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
    collections.abc.Collection,
)

_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)

_UNION_ORIGINS = (typing.Union, getattr(types, "UnionType", typing.Union))


@functools.lru_cache(maxsize=256)
def _adapter(annotation: Any) -> pydantic.TypeAdapter:
    return pydantic.TypeAdapter(annotation)


def encode(value: Any, date_format: Optional[DateFormat] = None) -> Optional[bytes]:
    """Serializes a body value to JSON bytes.

    Args:
        value (Any): The value to serialize. ``None`` means no body.
        date_format (Optional[apicall.dates.DateFormat]): The format applied
            to every date and datetime in the value.

    Returns:
        Optional[bytes]: The JSON document, or ``None`` if there is no body.

    Raises:
        apicall.exceptions.EncodeError: If the value cannot be serialized.
    """
    if value is None:
        return None
    try:
        adapter = _adapter(type(value))
        if date_format is None:
            return adapter.dump_json(value, by_alias=True)
        plain = adapter.dump_python(value, mode="python", by_alias=True)
        return pydantic_core.to_json(_format_dates(plain, date_format))
    except (ValueError, TypeError, OverflowError) as caught_exc:
        raise exceptions.EncodeError(
            f"Could not serialize {type(value).__name__}: {caught_exc}"
        ) from caught_exc


def decode(
    data: bytes, return_type: Any, date_format: Optional[DateFormat] = None
) -> Any:
    """Deserializes a JSON payload into ``return_type``.

    ``None`` as the return type accepts any payload and produces ``None``;
    ``bytes`` returns the payload untouched.

    Raises:
        apicall.exceptions.DecodeError: If the payload is not JSON or does not
            match ``return_type``. The message names the offending field.
    """
    if return_type is None or return_type is type(None):
        return None
    if return_type is bytes:
        return data
    try:
        payload = json.loads(data) if data else None
    except ValueError as caught_exc:
        raise exceptions.DecodeError(
            f"Response body is not valid JSON: {caught_exc}"
        ) from caught_exc

    if date_format is not None:
        payload = _parse_dates(return_type, payload, date_format, "$")

    try:
        return _adapter(return_type).validate_python(payload)
    except pydantic.ValidationError as caught_exc:
        raise exceptions.DecodeError(_describe(caught_exc)) from caught_exc


def _describe(error: pydantic.ValidationError) -> str:
    details = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "$"
        details.append(f"field '{location}': {item['msg']}")
    return f"Response payload does not match the expected type ({'; '.join(details)})"


def _format_dates(value: Any, date_format: DateFormat) -> Any:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return date_format.format(value)
    if isinstance(value, dict):
        return {key: _format_dates(item, date_format) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_format_dates(item, date_format) for item in value]
    return value


def _parse_date_string(annotation, text, date_format, path):
    try:
        if annotation is datetime.datetime:
            return date_format.parse(text)
        return date_format.parse_date(text)
    except ValueError as caught_exc:
        raise exceptions.DecodeError(
            f"Cannot decode date string {text!r} at field '{path}': {caught_exc}"
        ) from caught_exc


def _model_keys(model):
    for name, field in model.model_fields.items():
        alias = field.validation_alias
        key = alias if isinstance(alias, str) else (field.alias or name)
        yield name, key, field.annotation


def _dataclass_keys(cls):
    hints = typing.get_type_hints(cls, include_extras=True)
    for field in dataclasses.fields(cls):
        yield field.name, field.name, hints.get(field.name, Any)


def _parse_dates(annotation: Any, value: Any, date_format: DateFormat, path: str):
    """Replaces date strings at date-typed positions with parsed values."""
    if value is None or annotation is Any:
        return value

    if annotation in (datetime.datetime, datetime.date):
        if isinstance(value, str):
            return _parse_date_string(annotation, value, date_format, path)
        return value

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Annotated:
        return _parse_dates(args[0], value, date_format, path)

    if origin in _UNION_ORIGINS:
        candidates = [arg for arg in args if arg is not type(None)]
        if len(candidates) == 1:
            return _parse_dates(candidates[0], value, date_format, path)
        # Ambiguous unions are validated as-is.
        return value

    if origin in _SEQUENCE_ORIGINS and args and isinstance(value, list):
        return [
            _parse_dates(args[0], item, date_format, f"{path}[{index}]")
            for index, item in enumerate(value)
        ]

    if origin is tuple and args and isinstance(value, list):
        if len(args) == 2 and args[1] is Ellipsis:
            item_types = [args[0]] * len(value)
        else:
            item_types = list(args) + [Any] * (len(value) - len(args))
        return [
            _parse_dates(item_type, item, date_format, f"{path}[{index}]")
            for index, (item_type, item) in enumerate(zip(item_types, value))
        ]

    if origin in _MAPPING_ORIGINS and len(args) == 2 and isinstance(value, dict):
        return {
            key: _parse_dates(args[1], item, date_format, f"{path}.{key}")
            for key, item in value.items()
        }

    if not isinstance(annotation, type) or not isinstance(value, dict):
        return value

    if issubclass(annotation, pydantic.BaseModel):
        fields = _model_keys(annotation)
    elif dataclasses.is_dataclass(annotation):
        fields = _dataclass_keys(annotation)
    else:
        return value

    parsed = dict(value)
    for name, key, field_type in fields:
        if key not in parsed and name in parsed:
            key = name
        if key in parsed:
            parsed[key] = _parse_dates(
                field_type, parsed[key], date_format, f"{path}.{key}"
            )
    return parsed
