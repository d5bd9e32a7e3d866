"""
Signature algorithm interface

Concrete algorithms provide a name plus a sign/verify capability pair. Keys are
opaque handles; each algorithm validates and downcasts them itself.
"""

from abc import ABC, abstractmethod

from ..types import KeyHandle


class SignatureAlgorithm(ABC):
    """
    A named signing and verification capability
    
    Attributes:
        name: Algorithm identifier used in the alg signature parameter
        jose_algorithm: Equivalent JOSE identifier used for JWKS key selection
    """
    
    name: str = ""
    jose_algorithm: str = ""
    
    @abstractmethod
    def sign(self, private_key: KeyHandle, data: bytes) -> bytes:
        """
        Sign data with a private key.
        
        Args:
            private_key: Private key handle
            data: Bytes to sign
            
        Returns:
            bytes: Signature
        """
    
    @abstractmethod
    def verify(self, public_key: KeyHandle, signature: bytes, data: bytes) -> bool:
        """
        Verify a signature over data.
        
        Implementations return False rather than raising on malformed keys or
        signatures.
        """
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}')"
