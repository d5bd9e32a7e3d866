"""
Tests for JWKS key resolution
"""

import json
from unittest.mock import Mock, patch

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from jwt import PyJWKClient
from jwt.algorithms import ECAlgorithm, RSAAlgorithm

from messagesig_sdk.exceptions import KeyResolutionError
from messagesig_sdk.jwks import JwksKeyResolver, KeyResolver, KeyResolverCache, create_key_resolver

JWKS_URL = 'https://auth.example.com/.well-known/jwks.json'


def make_jwk(public_key, kid: str, algorithm=RSAAlgorithm) -> jwt.PyJWK:
    data = json.loads(algorithm.to_jwk(public_key))
    data['kid'] = kid
    return jwt.PyJWK(data)


@pytest.fixture
def jwk_client():
    return Mock(spec=PyJWKClient)


class TestJwksKeyResolver:
    """Test resolving keys through a PyJWKClient"""
    
    def test_empty_url_rejected(self):
        with pytest.raises(ValueError):
            JwksKeyResolver('')
    
    def test_satisfies_protocol(self, jwk_client):
        assert isinstance(JwksKeyResolver(JWKS_URL, jwk_client), KeyResolver)
    
    def test_default_client_configuration(self):
        resolver = create_key_resolver(JWKS_URL, cache_lifespan=120, timeout=5)
        
        assert isinstance(resolver.jwk_client, PyJWKClient)
        assert resolver.jwk_client.uri == JWKS_URL
    
    @pytest.mark.asyncio
    async def test_resolve_rsa_key(self, jwk_client, rsa_public_key):
        jwk_client.get_signing_key.return_value = make_jwk(rsa_public_key, 'client-key-1')
        resolver = JwksKeyResolver(JWKS_URL, jwk_client)
        
        key = await resolver.resolve('client-key-1', 'rsa-pss-sha512')
        
        assert key.public_numbers() == rsa_public_key.public_numbers()
        jwk_client.get_signing_key.assert_called_once_with('client-key-1')
    
    @pytest.mark.asyncio
    async def test_unknown_key(self, jwk_client):
        jwk_client.get_signing_key.side_effect = jwt.PyJWKClientError('Unable to find a signing key that matches: "nope"')
        resolver = JwksKeyResolver(JWKS_URL, jwk_client)
        
        with pytest.raises(KeyResolutionError) as exc_info:
            await resolver.resolve('nope', 'rsa-pss-sha512')
        
        assert exc_info.value.key_id == 'nope'
        assert exc_info.value.error_code == 'KEY_NOT_FOUND'
        assert exc_info.value.details['jwks_url'] == JWKS_URL
    
    @pytest.mark.asyncio
    async def test_key_type_mismatch(self, jwk_client):
        ec_public = ec.generate_private_key(ec.SECP256R1()).public_key()
        jwk_client.get_signing_key.return_value = make_jwk(ec_public, 'ec-key', ECAlgorithm)
        resolver = JwksKeyResolver(JWKS_URL, jwk_client)
        
        with pytest.raises(KeyResolutionError) as exc_info:
            await resolver.resolve('ec-key', 'rsa-v1_5-sha256')
        
        assert exc_info.value.error_code == 'KEY_TYPE_MISMATCH'


class TestKeyResolverCache:
    """Test per-URL resolver memoization"""
    
    def test_same_url_returns_same_resolver(self):
        cache = KeyResolverCache()
        
        first = cache.get(JWKS_URL)
        second = cache.get(JWKS_URL)
        
        assert first is second
        assert len(cache) == 1
    
    def test_different_urls(self):
        cache = KeyResolverCache()
        
        assert cache.get(JWKS_URL) is not cache.get('https://other.example.com/jwks')
        assert len(cache) == 2
    
    def test_settings_passed_to_client(self):
        with patch('messagesig_sdk.jwks.PyJWKClient') as client_class:
            KeyResolverCache(cache_lifespan=60, timeout=3).get(JWKS_URL)
        
        client_class.assert_called_once_with(JWKS_URL, cache_jwk_set=True, lifespan=60, timeout=3)
    
    def test_clear(self):
        cache = KeyResolverCache()
        first = cache.get(JWKS_URL)
        
        cache.clear()
        
        assert len(cache) == 0
        assert cache.get(JWKS_URL) is not first
