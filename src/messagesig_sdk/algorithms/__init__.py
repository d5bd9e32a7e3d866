"""
Pluggable signature algorithms

Built-in algorithms are registered explicitly through create_default_registry()
rather than at import time.
"""

from .base import SignatureAlgorithm
from .registry import AlgorithmRegistry, create_default_registry
from .rsa_pss_sha512 import RsaPssSha512
from .rsa_v1_5_sha256 import RsaV15Sha256

JOSE_ALGORITHMS = {
    RsaPssSha512.name: RsaPssSha512.jose_algorithm,
    RsaV15Sha256.name: RsaV15Sha256.jose_algorithm,
}


def to_jose_algorithm(algorithm: str) -> str:
    """Map an algorithm name to its JOSE identifier (rsa-pss-sha512 -> PS512)"""
    return JOSE_ALGORITHMS.get(algorithm, algorithm.upper())


__all__ = [
    'SignatureAlgorithm',
    'AlgorithmRegistry',
    'create_default_registry',
    'RsaPssSha512',
    'RsaV15Sha256',
    'JOSE_ALGORITHMS',
    'to_jose_algorithm',
]
