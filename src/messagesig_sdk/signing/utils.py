"""
Utility functions for request signing

This module provides content digest calculation, base64 helpers, timestamp
generation and private key import.
"""

import base64
import hashlib
import time
from typing import Union
from urllib.parse import urlsplit

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .types import SigningError, SigningErrorCodes
from ..algorithms import to_jose_algorithm
from ..exceptions import KeyImportError
from ..types import KeyHandle


def generate_timestamp() -> int:
    """
    Generate current Unix timestamp.
    
    Returns:
        int: Current Unix timestamp (seconds since epoch)
    """
    return int(time.time())


def to_bytes(data: Union[str, bytes]) -> bytes:
    """Encode text as UTF-8, pass bytes through"""
    if isinstance(data, str):
        return data.encode('utf-8')
    return data


def to_base64(data: bytes) -> str:
    """Standard base64 with padding"""
    return base64.b64encode(data).decode('ascii')


def calculate_content_digest(body: Union[str, bytes]) -> str:
    """
    Calculate a Content-Digest header value for a body.
    
    Args:
        body: Request body
        
    Returns:
        str: Header value of the form sha-256=:<base64>:
    """
    digest = hashlib.sha256(to_bytes(body)).digest()
    return f"sha-256=:{to_base64(digest)}:"


def validate_url(url: str) -> None:
    """
    Check that a URL is absolute.
    
    Raises:
        SigningError: If the URL has no scheme or host
    """
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise SigningError(
            f"URL must be absolute: {url}",
            SigningErrorCodes.INVALID_URL,
            {"url": url}
        )


def import_private_key(pem: str, algorithm: str) -> KeyHandle:
    """
    Import a PEM encoded private key for an algorithm.
    
    Args:
        pem: PEM text (PKCS#8 or traditional format, unencrypted)
        algorithm: Algorithm the key will be used with
        
    Returns:
        Private key object
        
    Raises:
        KeyImportError: If the PEM cannot be loaded or does not fit the algorithm
    """
    jose_alg = to_jose_algorithm(algorithm)
    
    try:
        key = serialization.load_pem_private_key(to_bytes(pem), password=None)
    except (ValueError, TypeError) as e:
        raise KeyImportError(
            f"Failed to import private key for {jose_alg}: {e}",
            details={"algorithm": algorithm}
        )
    
    if jose_alg[:2] in ('PS', 'RS') and not isinstance(key, rsa.RSAPrivateKey):
        raise KeyImportError(
            f"{jose_alg} requires an RSA private key",
            "KEY_TYPE_MISMATCH",
            {"algorithm": algorithm, "key_type": type(key).__name__}
        )
    
    return key
