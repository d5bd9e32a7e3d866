"""
RSASSA-PKCS1-v1_5 with SHA-256 (rsa-v1_5-sha256)
"""

import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .base import SignatureAlgorithm
from ..types import KeyHandle

logger = logging.getLogger(__name__)


class RsaV15Sha256(SignatureAlgorithm):
    """RSASSA-PKCS1-v1_5 using SHA-256"""
    
    name = "rsa-v1_5-sha256"
    jose_algorithm = "RS256"
    
    def sign(self, private_key: KeyHandle, data: bytes) -> bytes:
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise TypeError(f"{self.name} requires an RSA private key")
        
        return private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
    
    def verify(self, public_key: KeyHandle, signature: bytes, data: bytes) -> bool:
        try:
            public_key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
            return True
        except InvalidSignature:
            return False
        except Exception as e:
            logger.debug(f"{self.name} verification error: {e}")
            return False
