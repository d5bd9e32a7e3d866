"""
Component extraction for RFC 9421 HTTP Message Signatures

Maps a component identifier to its canonical string value for a specific
request. Identifiers starting with '@' are derived components; anything else
is a header name looked up case-insensitively.
"""

from typing import Mapping, Optional
from urllib.parse import urlsplit

from .types import HttpRequest, HeaderValue


def extract_component(request: HttpRequest, component: str) -> Optional[str]:
    """
    Extract a component value from an inbound request.

    Args:
        request: Request to read from
        component: Component identifier (e.g. "@method", "content-type")

    Returns:
        str or None: Canonical value, or None if the component is absent
    """
    if component.startswith('@'):
        return _extract_derived_component(request, component)

    return _join_header_value(_find_header(request.headers, component))


def _extract_derived_component(request: HttpRequest, component: str) -> Optional[str]:
    url = request.url

    if component == '@method':
        return request.method.upper()

    if component == '@target-uri':
        return f"{request.protocol}://{request.hostname}{url}"

    if component == '@authority':
        return request.hostname

    if component == '@scheme':
        return request.protocol

    if component == '@path':
        query_index = url.find('?')
        return url[:query_index] if query_index >= 0 else url

    if component == '@query':
        # An absent query canonicalizes to a bare "?"
        query_index = url.find('?')
        return url[query_index:] if query_index >= 0 else '?'

    return None


def extract_outgoing_component(
    method: str,
    url: str,
    headers: Mapping[str, str],
    component: str
) -> Optional[str]:
    """
    Extract a component value for an outbound request description.

    Args:
        method: HTTP method
        url: Absolute request URL
        headers: Outgoing headers (any casing)
        component: Component identifier

    Returns:
        str or None: Canonical value, or None if the component is absent
    """
    if not component.startswith('@'):
        return find_outgoing_header(headers, component)

    parts = urlsplit(url)

    if component == '@method':
        return method.upper()

    if component == '@target-uri':
        return url

    if component == '@authority':
        return _authority(parts)

    if component == '@scheme':
        return parts.scheme

    if component == '@path':
        return parts.path or '/'

    if component == '@query':
        return f"?{parts.query}" if parts.query else '?'

    return None


def find_outgoing_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """
    Look up an outgoing header by exact, lower-case, then Capitalized-Dash name.

    Falls back to a full case-insensitive scan so that mixed-case keys such as
    "X-Request-ID" are still found.
    """
    for candidate in (name, name.lower(), capitalize_header(name)):
        if candidate in headers:
            return headers[candidate]

    return _join_header_value(_find_header(headers, name))


def capitalize_header(name: str) -> str:
    """Convert a header name to Capitalized-Dash form (content-type -> Content-Type)"""
    return '-'.join(part[:1].upper() + part[1:].lower() for part in name.split('-'))


def _find_header(headers: Mapping[str, HeaderValue], name: str) -> Optional[HeaderValue]:
    target = name.lower()
    for key, value in headers.items():
        if key.lower() == target:
            return value
    return None


def _join_header_value(value: Optional[HeaderValue]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return ', '.join(value)
    return value


_DEFAULT_PORTS = {'http': 80, 'https': 443}


def _authority(parts) -> str:
    # Lower-cased host without userinfo; default ports are dropped
    host = parts.hostname or ''
    if ':' in host:
        host = f'[{host}]'

    port = parts.port
    if port is not None and port != _DEFAULT_PORTS.get(parts.scheme.lower()):
        return f'{host}:{port}'
    return host
