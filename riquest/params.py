"""
Request params: the typed description of a single call, and the validator that builds it
from a loosely-typed mapping.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from numbers import Real
from typing import Any, Dict, Optional

from .errors import ValidationError, ValidationFailure

ALLOWED_METHODS = ('GET', 'POST', 'PUT', 'DELETE')

# camelCase spelling accepted in input mappings -> attribute name
ALIASES = {
    'returnStream': 'return_stream',
    'createConnection': 'create_connection',
    'rejectUnauthorized': 'reject_unauthorized',
}

MAPPING_FIELDS = ('headers', 'data', 'agent')
STRING_FIELDS = ('auth', 'create_connection', 'ca', 'cert', 'key')
BOOLEAN_FIELDS = ('reject_unauthorized', 'return_stream')


@dataclass(frozen=True)
class RequestParams:
    url: str
    headers: Optional[Dict[str, Optional[str]]] = None
    method: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    timeout: Optional[float] = None
    return_stream: Optional[bool] = None
    auth: Optional[str] = None
    agent: Optional[Dict[str, Any]] = None
    create_connection: Optional[str] = None
    ca: Optional[str] = None
    cert: Optional[str] = None
    key: Optional[str] = None
    reject_unauthorized: Optional[bool] = None


def _type_name(value: Any) -> str:
    return type(value).__name__


def _wrong_type(name: str, expected: str, value: Any) -> ValidationError:
    return ValidationError(f"{name} must be {expected}, {_type_name(value)} given",
                           field=name, failure=ValidationFailure.WRONG_TYPE)


def _normalize_keys(raw: Mapping) -> Dict[str, Any]:
    known = {f.name for f in fields(RequestParams)}
    values = {}
    for key, value in raw.items():
        name = ALIASES.get(key, key)
        if name in known:
            values[name] = value
    return values


def validate_params(raw: Any) -> RequestParams:
    """Check a params mapping and build a RequestParams from it.

    Accepts the camelCase keys of the JSON-style contract (``returnStream``...)
    or their snake_case spelling. Unknown keys are ignored and None counts as
    absent. Raises ValidationError naming the first offending field.
    """
    if isinstance(raw, RequestParams):
        raw = {f.name: getattr(raw, f.name) for f in fields(RequestParams)}

    if not isinstance(raw, Mapping):
        raise ValidationError(f"params must be a mapping, {_type_name(raw)} given",
                              failure=ValidationFailure.NOT_A_MAPPING)

    values = _normalize_keys(raw)

    url = values.get('url')
    if url is None:
        raise ValidationError("url must be a string, NoneType given",
                              field='url', failure=ValidationFailure.MISSING)
    if not isinstance(url, str):
        raise _wrong_type('url', 'a string', url)
    if not url:
        raise ValidationError("url must be a non-empty string",
                              field='url', failure=ValidationFailure.MISSING)

    for name in MAPPING_FIELDS:
        value = values.get(name)
        if value is not None and not isinstance(value, Mapping):
            raise _wrong_type(name, 'a mapping', value)

    method = values.get('method')
    if method is not None:
        if not isinstance(method, str):
            raise _wrong_type('method', 'a string', method)
        if method.upper() not in ALLOWED_METHODS:
            raise ValidationError(
                f"method must be one of {', '.join(ALLOWED_METHODS)}, {method!r} given",
                field='method', failure=ValidationFailure.UNSUPPORTED_VALUE)

    timeout = values.get('timeout')
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, Real):
            raise _wrong_type('timeout', 'a number', timeout)
        try:
            float(timeout)
        except OverflowError:
            raise ValidationError("timeout is too large", field='timeout',
                                  failure=ValidationFailure.UNSUPPORTED_VALUE)

    for name in STRING_FIELDS:
        value = values.get(name)
        if value is not None and not isinstance(value, str):
            raise _wrong_type(name, 'a string', value)

    for name in BOOLEAN_FIELDS:
        value = values.get(name)
        if value is not None and not isinstance(value, bool):
            raise _wrong_type(name, 'a boolean', value)

    headers = values.get('headers')
    if headers is not None:
        for header, header_value in headers.items():
            if not isinstance(header, str):
                raise _wrong_type(f"headers key {header!r}", 'a string', header)
            if not header.isascii():
                raise ValidationError(f"headers key {header!r} must be ascii",
                                      field='headers', failure=ValidationFailure.UNSUPPORTED_VALUE)
            if header_value is None:
                continue
            if not isinstance(header_value, str):
                raise _wrong_type(f"headers[{header!r}]", 'a string', header_value)
            if not header_value.isascii():
                raise ValidationError(f"headers[{header!r}] must be ascii, {header_value!r} given",
                                      field='headers', failure=ValidationFailure.UNSUPPORTED_VALUE)
        values['headers'] = dict(headers)

    for name in ('data', 'agent'):
        if values.get(name) is not None:
            values[name] = dict(values[name])

    return RequestParams(**values)
