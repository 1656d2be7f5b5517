"""
URL parsing and the supported schemes.
"""

import urllib.parse
from dataclasses import dataclass
from enum import Enum

from .errors import UnsupportedSchemeError, UrlParseError


class Scheme(Enum):
    HTTP = ('http', 80, False)
    HTTPS = ('https', 443, True)

    def __init__(self, scheme_name: str, default_port: int, supports_tls: bool):
        self.scheme_name = scheme_name
        self.default_port = default_port
        self.supports_tls = supports_tls

    @property
    def label(self) -> str:
        """Capitalized scheme name used as error message prefix ("Https")."""
        return capitalize(self.scheme_name)

    @classmethod
    def from_name(cls, name: str) -> "Scheme":
        for scheme in cls:
            if scheme.scheme_name == name:
                return scheme
        raise UnsupportedSchemeError(name)


def capitalize(text: str) -> str:
    """Lowercase the string and upper-case the first letter of each word."""
    return ' '.join(word[:1].upper() + word[1:] for word in text.lower().split(' '))


@dataclass(frozen=True)
class ResolvedUrl:
    scheme: Scheme
    host: str
    port: int
    path: str

    @property
    def netloc(self) -> str:
        host = f"[{self.host}]" if ':' in self.host else self.host
        return f"{host}:{self.port}"

    @property
    def target(self) -> str:
        """Absolute URL the transport is pointed at."""
        return f"{self.scheme.scheme_name}://{self.netloc}{self.path}"


def resolve_url(url: str) -> ResolvedUrl:
    """Split an absolute http(s) URL into scheme, host, port and path.

    The path keeps the query string and fragment. The port is the explicit one
    when present, the scheme default otherwise.
    """
    try:
        parts = urllib.parse.urlsplit(url.strip())
    except ValueError as e:
        raise UrlParseError(str(e)) from e

    if not parts.scheme:
        raise UrlParseError(f"Invalid URL: {url}")

    scheme = Scheme.from_name(parts.scheme.lower())

    if not parts.hostname:
        raise UrlParseError(f"Invalid URL: {url}")

    try:
        port = parts.port
    except ValueError as e:
        raise UrlParseError(str(e)) from e

    path = parts.path or '/'
    if parts.query:
        path += f"?{parts.query}"
    if parts.fragment:
        path += f"#{parts.fragment}"

    return ResolvedUrl(
        scheme=scheme,
        host=parts.hostname,
        port=port if port is not None else scheme.default_port,
        path=path,
    )
