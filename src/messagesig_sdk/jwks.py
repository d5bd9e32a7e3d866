"""
Public key resolution from a JWKS endpoint

Fetching, caching and refresh-on-rotation of the key set are delegated to
PyJWT's PyJWKClient. This module adapts it to the (key_id, algorithm) lookup the
verifier needs and memoizes one resolver per JWKS URL.
"""

import asyncio
import logging
from typing import Dict, Optional, Protocol, runtime_checkable

import jwt
from jwt import PyJWKClient

from .algorithms import to_jose_algorithm
from .exceptions import KeyResolutionError
from .types import KeyHandle

logger = logging.getLogger(__name__)

# JWK key type each JOSE algorithm family requires
_JOSE_KEY_TYPES = {
    'PS': 'RSA',
    'RS': 'RSA',
    'ES': 'EC',
    'Ed': 'OKP',
}


@runtime_checkable
class KeyResolver(Protocol):
    """Protocol for resolving a verification key"""

    async def resolve(self, key_id: str, algorithm: str) -> KeyHandle:
        """Return the public key for key_id, raising KeyResolutionError if unavailable"""
        ...


class JwksKeyResolver:
    """
    Key resolver backed by a remote JSON Web Key Set

    One PyJWKClient is held per resolver; its key set cache is reused across
    every resolution against the same URL.
    """

    def __init__(
        self,
        jwks_url: str,
        jwk_client: Optional[PyJWKClient] = None,
        cache_lifespan: int = 300,
        timeout: int = 30
    ):
        """
        Initialize the resolver.

        Args:
            jwks_url: JWKS endpoint URL
            jwk_client: Optional preconfigured client (used by tests)
            cache_lifespan: Seconds a fetched key set stays cached
            timeout: HTTP timeout for key set fetches in seconds
        """
        if not jwks_url:
            raise ValueError("JWKS URL cannot be empty")

        self.jwks_url = jwks_url
        self.jwk_client = jwk_client or PyJWKClient(
            jwks_url,
            cache_jwk_set=True,
            lifespan=cache_lifespan,
            timeout=timeout
        )

    async def resolve(self, key_id: str, algorithm: str) -> KeyHandle:
        """
        Resolve the public key for a key id and algorithm.

        Args:
            key_id: Key identifier from the keyid parameter
            algorithm: Algorithm name from the alg parameter

        Returns:
            Public key object usable by the algorithm's verify

        Raises:
            KeyResolutionError: If the key is unknown, unsuitable, or the fetch fails
        """
        jose_alg = to_jose_algorithm(algorithm)

        try:
            signing_key = await asyncio.to_thread(self.jwk_client.get_signing_key, key_id)
        except jwt.PyJWTError as e:
            logger.warning(f"Key resolution failed for key ID {key_id} from {self.jwks_url}: {e}")
            raise KeyResolutionError(
                f"Public key not found for key ID: {key_id}",
                key_id,
                details={'jwks_url': self.jwks_url, 'original_error': str(e)}
            ) from e

        expected_kty = _JOSE_KEY_TYPES.get(jose_alg[:2])
        if expected_kty and signing_key.key_type != expected_kty:
            raise KeyResolutionError(
                f"Key {key_id} has type {signing_key.key_type}, {jose_alg} requires {expected_kty}",
                key_id,
                error_code="KEY_TYPE_MISMATCH",
                details={'algorithm': algorithm, 'jose_algorithm': jose_alg}
            )

        logger.debug(f"Resolved key {key_id} for {jose_alg} from {self.jwks_url}")
        return signing_key.key


class KeyResolverCache:
    """Memoizes one JwksKeyResolver per JWKS URL"""

    def __init__(self, cache_lifespan: int = 300, timeout: int = 30):
        self.cache_lifespan = cache_lifespan
        self.timeout = timeout
        self._resolvers: Dict[str, JwksKeyResolver] = {}

    def get(self, jwks_url: str) -> JwksKeyResolver:
        """Return the resolver for a URL, creating it on first use"""
        resolver = self._resolvers.get(jwks_url)
        if resolver is None:
            logger.info(f"Creating JWKS key resolver for {jwks_url}")
            resolver = JwksKeyResolver(
                jwks_url,
                cache_lifespan=self.cache_lifespan,
                timeout=self.timeout
            )
            self._resolvers[jwks_url] = resolver
        return resolver

    def clear(self) -> None:
        """Drop all memoized resolvers"""
        self._resolvers.clear()

    def __len__(self) -> int:
        return len(self._resolvers)


def create_key_resolver(jwks_url: str, **kwargs) -> JwksKeyResolver:
    """Create a resolver for a JWKS endpoint"""
    return JwksKeyResolver(jwks_url, **kwargs)
