"""
Per-scheme httpx transports. Each call gets its own transport, nothing is pooled
between calls.
"""

import ssl
from typing import Any, Mapping, Optional, Union

import certifi
import httpx

from .errors import TransportError, ValidationError
from .url import Scheme


def build_ssl_context(options: Mapping[str, Any]) -> Union[ssl.SSLContext, bool]:
    """TLS settings for an https call.

    ``ca`` may be PEM text or a path to a bundle, ``cert`` and ``key`` are paths;
    ``key`` needs ``cert``; without ``key`` the private key is read from ``cert``.
    Returns True (httpx default verification) when no TLS field was given.
    """
    ca = options.get('ca')
    cert = options.get('cert')
    key = options.get('key')
    reject_unauthorized = options.get('reject_unauthorized')

    if key is not None and cert is None:
        raise ValidationError("key requires cert", field='key')

    if ca is None and cert is None and reject_unauthorized is None:
        return True

    if ca is None:
        context = ssl.create_default_context(cafile=certifi.where())
    elif '-----BEGIN' in ca:
        context = ssl.create_default_context(cadata=ca)
    else:
        context = ssl.create_default_context(cafile=ca)

    if cert is not None:
        context.load_cert_chain(certfile=cert, keyfile=key)

    if reject_unauthorized is False:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

    return context


def create_transport(options: Mapping[str, Any]) -> httpx.AsyncBaseTransport:
    """Transport for the call's scheme.

    ``agent`` entries are passed to httpx.AsyncHTTPTransport (limits, proxy,
    local_address, http2...). ``create_connection`` is a Unix socket path.
    """
    scheme: Scheme = options['scheme']
    kwargs = dict(options.get('agent') or {})

    if scheme.supports_tls:
        try:
            kwargs['verify'] = build_ssl_context(options)
        except (OSError, ssl.SSLError) as e:
            raise TransportError(scheme.label, str(e)) from e

    if options.get('create_connection') is not None:
        kwargs['uds'] = options['create_connection']

    try:
        return httpx.AsyncHTTPTransport(**kwargs)
    except TypeError as e:
        raise ValidationError(f"agent has an unsupported setting: {e}", field='agent') from e


def basic_auth(options: Mapping[str, Any]) -> Optional[httpx.BasicAuth]:
    """``user:password`` string to httpx basic auth."""
    auth = options.get('auth')
    if auth is None:
        return None
    username, _, password = auth.partition(':')
    return httpx.BasicAuth(username, password)
