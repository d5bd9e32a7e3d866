"""
RSA-PSS with SHA-512 (rsa-pss-sha512)
"""

import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .base import SignatureAlgorithm
from ..types import KeyHandle

logger = logging.getLogger(__name__)


def _pss_padding() -> padding.PSS:
    # Salt length equals the digest length (64 bytes for SHA-512)
    return padding.PSS(
        mgf=padding.MGF1(hashes.SHA512()),
        salt_length=padding.PSS.DIGEST_LENGTH
    )


class RsaPssSha512(SignatureAlgorithm):
    """RSASSA-PSS using SHA-512 and a digest-length salt"""
    
    name = "rsa-pss-sha512"
    jose_algorithm = "PS512"
    
    def sign(self, private_key: KeyHandle, data: bytes) -> bytes:
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise TypeError(f"{self.name} requires an RSA private key")
        
        return private_key.sign(data, _pss_padding(), hashes.SHA512())
    
    def verify(self, public_key: KeyHandle, signature: bytes, data: bytes) -> bool:
        try:
            public_key.verify(signature, data, _pss_padding(), hashes.SHA512())
            return True
        except InvalidSignature:
            return False
        except Exception as e:
            logger.debug(f"{self.name} verification error: {e}")
            return False
