"""
Type definitions for request signing

This module provides the outbound request description, signer options and
signing errors for RFC 9421 HTTP Message Signatures.
"""

from typing import Dict, List, Optional, Union, Any
from dataclasses import dataclass, field

from ..types import KeyHandle


SIGNATURE_LABEL = "sig1"


@dataclass
class SignRequestData:
    """
    Outbound request to be signed
    
    Attributes:
        method: HTTP method (GET, POST, etc.)
        url: Absolute request URL
        headers: Request headers as key-value pairs
        body: Optional request body (string or bytes)
    """
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Union[str, bytes]] = None
    
    def __post_init__(self):
        """Validate request after initialization"""
        if not self.url:
            raise ValueError("Request URL cannot be empty")
        
        if not self.method:
            raise ValueError("Request method cannot be empty")
        
        if not isinstance(self.headers, dict):
            raise ValueError("Headers must be a dictionary")


@dataclass
class SignerOptions:
    """
    Options for creating a signer
    
    Attributes:
        key_id: Key identifier placed in the keyid parameter
        private_key: PEM string or an already imported private key handle
        algorithm: Registered algorithm name
        components: Components to cover, in order
    """
    key_id: str
    private_key: Union[str, KeyHandle]
    algorithm: str
    components: List[str]
    
    def __post_init__(self):
        """Validate signer options"""
        if not self.key_id:
            raise ValueError("Key ID cannot be empty")
        
        if self.private_key is None or self.private_key == "":
            raise ValueError("Private key cannot be empty")
        
        if not self.algorithm:
            raise ValueError("Algorithm cannot be empty")
        
        if not isinstance(self.components, list):
            raise ValueError("Components must be a list")


class SigningError(Exception):
    """
    Error class for signing operations
    
    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Optional additional error details
    """
    
    def __init__(
        self, 
        message: str, 
        code: str, 
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.code}, details: {self.details})"
        return f"{self.message} (code: {self.code})"
        
    def __repr__(self) -> str:
        return f"SigningError(message='{self.message}', code='{self.code}', details={self.details})"


class SigningErrorCodes:
    """Standard error codes for signing operations"""
    
    # Configuration errors
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    
    # Request errors
    INVALID_URL = "INVALID_URL"
    
    # Signing errors
    SIGNING_FAILED = "SIGNING_FAILED"
