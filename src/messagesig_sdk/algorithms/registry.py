"""
Algorithm registry

Maps algorithm names to SignatureAlgorithm instances. A registry is built once
at startup and handed to the verifier and signer; registering a name again
replaces the previous entry.
"""

import logging
from typing import Dict, Iterator, List, Optional

from .base import SignatureAlgorithm

logger = logging.getLogger(__name__)


class AlgorithmRegistry:
    """Name to algorithm mapping, populated at startup and read afterwards"""
    
    def __init__(self):
        self._algorithms: Dict[str, SignatureAlgorithm] = {}
    
    def register(self, algorithm: SignatureAlgorithm) -> None:
        """Register an algorithm; last registration for a name wins"""
        if not algorithm.name:
            raise ValueError("Algorithm name cannot be empty")
        
        if algorithm.name in self._algorithms:
            logger.debug(f"Replacing registered algorithm: {algorithm.name}")
        self._algorithms[algorithm.name] = algorithm
    
    def get(self, name: str) -> Optional[SignatureAlgorithm]:
        """Look up an algorithm by name, None if not registered"""
        return self._algorithms.get(name)
    
    def list(self) -> List[str]:
        """Names of all registered algorithms, in registration order"""
        return list(self._algorithms.keys())
    
    def __contains__(self, name: object) -> bool:
        return name in self._algorithms
    
    def __iter__(self) -> Iterator[SignatureAlgorithm]:
        return iter(list(self._algorithms.values()))
    
    def __len__(self) -> int:
        return len(self._algorithms)


def create_default_registry() -> AlgorithmRegistry:
    """
    Create a registry holding the built-in algorithms.
    
    Returns:
        AlgorithmRegistry: Registry with rsa-pss-sha512 and rsa-v1_5-sha256
    """
    from .rsa_pss_sha512 import RsaPssSha512
    from .rsa_v1_5_sha256 import RsaV15Sha256
    
    registry = AlgorithmRegistry()
    registry.register(RsaPssSha512())
    registry.register(RsaV15Sha256())
    return registry
