"""
Builds the transport options of a call from its params and resolved URL.
"""

import json
import math
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .config import config
from .errors import SerializationError
from .params import RequestParams
from .url import ResolvedUrl


def remove_nil_values(obj: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of obj without the keys whose value is None."""
    return {k: v for k, v in obj.items() if v is not None}


def resolve_timeout(timeout: Optional[float]) -> float:
    """Timeout in milliseconds, falling back to the configured default."""
    if timeout is None or math.isnan(timeout):
        return config.timeout_ms
    return timeout


def build_options(params: RequestParams, resolved: ResolvedUrl) -> Mapping[str, Any]:
    """Read-only, None-free options for one call.

    Caller headers are overlaid on the default JSON headers; a header explicitly
    set to None is removed, which is how a caller drops a default header. TLS
    material is only kept for https.
    """
    tls = resolved.scheme.supports_tls
    headers = config.default_headers
    headers.update(params.headers or {})

    return MappingProxyType(remove_nil_values({
        'scheme': resolved.scheme,
        'hostname': resolved.host,
        'port': resolved.port,
        'path': resolved.path,
        'method': params.method.upper() if params.method else 'GET',
        'headers': MappingProxyType(remove_nil_values(headers)),
        'agent': params.agent,
        'auth': params.auth,
        'create_connection': params.create_connection,
        'ca': params.ca if tls else None,
        'cert': params.cert if tls else None,
        'key': params.key if tls else None,
        'reject_unauthorized': params.reject_unauthorized if tls else None,
        'return_stream': params.return_stream or False,
        'timeout': resolve_timeout(params.timeout),
    }))


def serialize_body(data: Optional[Mapping[str, Any]]) -> Optional[bytes]:
    """Compact JSON encoding of the request body, None when there is no data."""
    if data is None:
        return None
    try:
        return json.dumps(data, separators=(',', ':'), allow_nan=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e
