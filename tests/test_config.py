"""
Tests for configuration loading
"""

import json

import pytest

from messagesig_sdk.config import HttpSignatureConfig, SignerConfig, load_config_json
from messagesig_sdk.config.settings import get_env_int, get_env_list
from messagesig_sdk.exceptions import ConfigurationError


class TestEnvHelpers:
    """Test environment parsing helpers"""
    
    def test_get_env_int(self):
        assert get_env_int({'X': '42'}, 'X', 7) == 42
        assert get_env_int({}, 'X', 7) == 7
        assert get_env_int({'X': 'abc'}, 'X', 7) == 7
    
    def test_get_env_list(self):
        assert get_env_list({'X': '@method, @path,content-digest'}, 'X') == ['@method', '@path', 'content-digest']
        assert get_env_list({'X': '@method @path'}, 'X') == ['@method', '@path']
        assert get_env_list({}, 'X') is None


class TestHttpSignatureConfig:
    """Test verification configuration"""
    
    def test_defaults(self):
        config = HttpSignatureConfig()
        
        assert config.jwks_url is None
        assert config.max_age == 300
        assert config.algorithms is None
        assert config.required_components == ['@method', '@target-uri', '@authority']
    
    def test_from_env(self):
        config = HttpSignatureConfig.from_env({
            'HTTP_SIG_JWKS_URL': 'https://auth.example.com/jwks',
            'HTTP_SIG_MAX_AGE': '120',
            'HTTP_SIG_ALGORITHMS': 'rsa-pss-sha512',
            'HTTP_SIG_REQUIRED_COMPONENTS': '@method,content-digest',
        })
        
        assert config.jwks_url == 'https://auth.example.com/jwks'
        assert config.max_age == 120
        assert config.algorithms == ['rsa-pss-sha512']
        assert config.required_components == ['@method', 'content-digest']
    
    def test_invalid_max_age_falls_back(self):
        assert HttpSignatureConfig.from_env({'HTTP_SIG_MAX_AGE': 'soon'}).max_age == 300
    
    def test_non_positive_max_age(self):
        with pytest.raises(ConfigurationError):
            HttpSignatureConfig(max_age=0)
    
    def test_empty_algorithm_list(self):
        with pytest.raises(ConfigurationError):
            HttpSignatureConfig(algorithms=[])


class TestSignerConfig:
    """Test signing configuration"""
    
    def test_from_env_inline_key(self, rsa_private_pem):
        config = SignerConfig.from_env({
            'HTTP_SIG_KEY_ID': 'client-key-1',
            'HTTP_SIG_PRIVATE_KEY': rsa_private_pem,
            'HTTP_SIG_COMPONENTS': '@method @target-uri',
        })
        
        assert config.key_id == 'client-key-1'
        assert config.algorithm == 'rsa-pss-sha512'
        assert config.components == ['@method', '@target-uri']
    
    def test_from_env_key_file(self, tmp_path, rsa_private_pem):
        key_file = tmp_path / 'key.pem'
        key_file.write_text(rsa_private_pem)
        
        config = SignerConfig.from_env({
            'HTTP_SIG_KEY_ID': 'k',
            'HTTP_SIG_PRIVATE_KEY_FILE': str(key_file),
            'HTTP_SIG_ALGORITHM': 'rsa-v1_5-sha256',
        })
        
        assert config.private_key_pem == rsa_private_pem
        assert config.algorithm == 'rsa-v1_5-sha256'
        assert config.components == ['@method', '@target-uri', '@authority', 'content-digest']
    
    def test_unreadable_key_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read private key file"):
            SignerConfig.from_env({'HTTP_SIG_KEY_ID': 'k', 'HTTP_SIG_PRIVATE_KEY_FILE': str(tmp_path / 'missing.pem')})
    
    def test_missing_key(self):
        with pytest.raises(ConfigurationError, match="Private key"):
            SignerConfig.from_env({'HTTP_SIG_KEY_ID': 'k'})
    
    def test_missing_key_id(self):
        with pytest.raises(ConfigurationError, match="Key ID"):
            SignerConfig(key_id='', private_key_pem='pem')


class TestLoadConfigJson:
    """Test JSON configuration documents"""
    
    def test_both_sections(self):
        loaded = load_config_json(json.dumps({
            'verification': {'jwks_url': 'https://auth.example.com/jwks', 'max_age': 60},
            'signing': {'key_id': 'k', 'private_key_pem': 'pem', 'components': ['@method']},
        }))
        
        assert loaded['verification'].max_age == 60
        assert loaded['signing'].key_id == 'k'
        assert loaded['signing'].components == ['@method']
    
    def test_verification_only(self):
        loaded = load_config_json('{}')
        
        assert isinstance(loaded['verification'], HttpSignatureConfig)
        assert loaded['signing'] is None
    
    def test_invalid_json(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_json('{not json')
        assert exc_info.value.error_code == 'PARSE_ERROR'
    
    def test_not_an_object(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_json('[1, 2]')
        assert exc_info.value.error_code == 'INVALID_FORMAT'
    
    def test_missing_signing_field(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_json('{"signing": {"key_id": "k"}}')
        assert exc_info.value.error_code == 'INVALID_FORMAT'
    
    def test_bad_max_age(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_json('{"verification": {"max_age": "later"}}')
        assert exc_info.value.error_code == 'INVALID_FORMAT'
