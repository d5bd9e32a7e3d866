"""
Core type definitions shared by the signing and verification paths

This module provides the request abstraction consumed by component extraction
and the parsed representations of the RFC 9421 Signature-Input and Signature
headers.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol, Union, runtime_checkable
from dataclasses import dataclass, field
from urllib.parse import urlsplit


# Opaque key material: a cryptography key object, or anything an algorithm accepts
KeyHandle = Any

HeaderValue = Union[str, List[str]]


@runtime_checkable
class HttpRequest(Protocol):
    """Protocol for inbound requests that can be verified"""

    method: str
    url: str  # raw path + query string
    hostname: str
    protocol: str  # 'http' or 'https'
    headers: Mapping[str, HeaderValue]


@dataclass
class IncomingRequest:
    """
    Inbound HTTP request as seen by the verification layer

    Attributes:
        method: HTTP method
        url: Raw path and query string (e.g. "/api/data?x=1")
        hostname: Host as provided by the transport
        protocol: Transport scheme
        headers: Request headers; multi-value headers may be lists
        body: Optional raw request body
    """
    method: str
    url: str
    hostname: str
    protocol: str = "https"
    headers: Dict[str, HeaderValue] = field(default_factory=dict)
    body: Optional[Union[str, bytes]] = None

    def __post_init__(self):
        """Normalize headers to lowercase for case-insensitive lookup"""
        if not isinstance(self.headers, dict):
            raise ValueError("Headers must be a dictionary")

        self.headers = {k.lower(): v for k, v in self.headers.items()}

    @classmethod
    def from_url(
        cls,
        method: str,
        url: str,
        headers: Optional[Dict[str, HeaderValue]] = None,
        body: Optional[Union[str, bytes]] = None
    ) -> 'IncomingRequest':
        """
        Build a request from an absolute URL.

        Args:
            method: HTTP method
            url: Absolute URL (scheme://host[:port]/path?query)
            headers: Optional request headers
            body: Optional request body

        Returns:
            IncomingRequest: Request with protocol, hostname and path split out

        Raises:
            ValueError: If the URL is not absolute
        """
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"URL must be absolute: {url}")

        target = parts.path or "/"
        if parts.query:
            target = f"{target}?{parts.query}"

        return cls(
            method=method,
            url=target,
            hostname=parts.netloc,
            protocol=parts.scheme,
            headers=headers or {},
            body=body
        )


@dataclass
class ParsedSignatureInput:
    """
    One signature's declared parameters from the Signature-Input header

    Attributes:
        label: Signature label correlating to a Signature entry
        components: Covered component identifiers, in declared order
        keyid: Key identifier
        alg: Algorithm name
        created: Optional creation time (Unix seconds)
        expires: Optional expiry time (Unix seconds)
        nonce: Optional nonce
    """
    label: str
    components: List[str]
    keyid: str
    alg: str
    created: Optional[int] = None
    expires: Optional[int] = None
    nonce: Optional[str] = None


@dataclass
class ParsedSignature:
    """Raw signature bytes from the Signature header, keyed by label"""
    label: str
    value: bytes


@dataclass(frozen=True)
class HttpSignatureInfo:
    """
    Proof-of-signing record attached to a request after successful verification

    Attributes:
        key_id: Key identifier that produced the signature
        algorithm: Algorithm name
        components: Components covered by the signature
        created: Optional creation time (Unix seconds)
    """
    key_id: str
    algorithm: str
    components: List[str]
    created: Optional[int] = None
