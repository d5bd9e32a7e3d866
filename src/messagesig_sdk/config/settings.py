"""
Configuration for HTTP message signing and verification

Values are read from environment variables, a dictionary, or a JSON document.
Integer values that cannot be parsed fall back to their defaults.
"""

import json
import os
from typing import Any, Dict, List, Mapping, Optional
from dataclasses import dataclass, field

from ..exceptions import ConfigurationError

DEFAULT_MAX_AGE = 300
DEFAULT_REQUIRED_COMPONENTS = ['@method', '@target-uri', '@authority']
DEFAULT_SIGNING_COMPONENTS = ['@method', '@target-uri', '@authority', 'content-digest']
DEFAULT_SIGNING_ALGORITHM = 'rsa-pss-sha512'


def get_env_int(env: Mapping[str, str], key: str, default: int) -> int:
    """Parse an integer variable, falling back to default when absent or invalid"""
    value = env.get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_env_list(env: Mapping[str, str], key: str) -> Optional[List[str]]:
    """Parse a comma or whitespace separated list, None when unset"""
    value = env.get(key)
    if not value:
        return None
    return [item for item in value.replace(',', ' ').split() if item]


@dataclass
class HttpSignatureConfig:
    """
    Verification settings
    
    Attributes:
        jwks_url: JWKS endpoint used to resolve public keys
        max_age: Maximum signature age in seconds
        algorithms: Allowed algorithm names (None allows all registered)
        required_components: Components every signature must cover
        jwks_cache_lifespan: Seconds a fetched key set is cached
        jwks_timeout: JWKS fetch timeout in seconds
    """
    jwks_url: Optional[str] = None
    max_age: int = DEFAULT_MAX_AGE
    algorithms: Optional[List[str]] = None
    required_components: List[str] = field(default_factory=lambda: list(DEFAULT_REQUIRED_COMPONENTS))
    jwks_cache_lifespan: int = 300
    jwks_timeout: int = 30
    
    def __post_init__(self):
        """Validate configuration"""
        if self.max_age <= 0:
            raise ConfigurationError("Max signature age must be positive", details={"max_age": self.max_age})
        if self.algorithms is not None and not self.algorithms:
            raise ConfigurationError("Allowed algorithms list cannot be empty")
        if self.jwks_cache_lifespan <= 0 or self.jwks_timeout <= 0:
            raise ConfigurationError("JWKS cache lifespan and timeout must be positive")
    
    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'HttpSignatureConfig':
        """Load verification settings from HTTP_SIG_* environment variables"""
        env = os.environ if env is None else env
        return cls(
            jwks_url=env.get('HTTP_SIG_JWKS_URL') or None,
            max_age=get_env_int(env, 'HTTP_SIG_MAX_AGE', DEFAULT_MAX_AGE),
            algorithms=get_env_list(env, 'HTTP_SIG_ALGORITHMS'),
            required_components=get_env_list(env, 'HTTP_SIG_REQUIRED_COMPONENTS') or list(DEFAULT_REQUIRED_COMPONENTS),
            jwks_cache_lifespan=get_env_int(env, 'HTTP_SIG_JWKS_CACHE_LIFESPAN', 300),
            jwks_timeout=get_env_int(env, 'HTTP_SIG_JWKS_TIMEOUT', 30),
        )
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HttpSignatureConfig':
        """Load verification settings from a dictionary"""
        try:
            return cls(
                jwks_url=data.get('jwks_url'),
                max_age=int(data.get('max_age', DEFAULT_MAX_AGE)),
                algorithms=data.get('algorithms'),
                required_components=list(data.get('required_components', DEFAULT_REQUIRED_COMPONENTS)),
                jwks_cache_lifespan=int(data.get('jwks_cache_lifespan', 300)),
                jwks_timeout=int(data.get('jwks_timeout', 30)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid verification configuration: {e}", "INVALID_FORMAT")


@dataclass
class SignerConfig:
    """
    Outbound signing settings
    
    Attributes:
        key_id: Key identifier placed in the keyid parameter
        private_key_pem: PEM encoded private key
        algorithm: Signing algorithm name
        components: Components to cover, in order
    """
    key_id: str
    private_key_pem: str
    algorithm: str = DEFAULT_SIGNING_ALGORITHM
    components: List[str] = field(default_factory=lambda: list(DEFAULT_SIGNING_COMPONENTS))
    
    def __post_init__(self):
        """Validate configuration"""
        if not self.key_id:
            raise ConfigurationError("Key ID cannot be empty")
        if not self.private_key_pem:
            raise ConfigurationError("Private key cannot be empty")
        if not self.components:
            raise ConfigurationError("At least one signature component is required")
    
    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'SignerConfig':
        """
        Load signing settings from HTTP_SIG_* environment variables.
        
        The private key comes from HTTP_SIG_PRIVATE_KEY, or from the file named
        by HTTP_SIG_PRIVATE_KEY_FILE.
        """
        env = os.environ if env is None else env
        
        private_key = env.get('HTTP_SIG_PRIVATE_KEY')
        key_file = env.get('HTTP_SIG_PRIVATE_KEY_FILE')
        if not private_key and key_file:
            try:
                with open(key_file, 'r', encoding='utf-8') as fh:
                    private_key = fh.read()
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot read private key file: {e}",
                    details={"path": key_file}
                )
        
        return cls(
            key_id=env.get('HTTP_SIG_KEY_ID', ''),
            private_key_pem=private_key or '',
            algorithm=env.get('HTTP_SIG_ALGORITHM') or DEFAULT_SIGNING_ALGORITHM,
            components=get_env_list(env, 'HTTP_SIG_COMPONENTS') or list(DEFAULT_SIGNING_COMPONENTS),
        )
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SignerConfig':
        """Load signing settings from a dictionary"""
        try:
            return cls(
                key_id=data['key_id'],
                private_key_pem=data['private_key_pem'],
                algorithm=data.get('algorithm', DEFAULT_SIGNING_ALGORITHM),
                components=list(data.get('components', DEFAULT_SIGNING_COMPONENTS)),
            )
        except KeyError as e:
            raise ConfigurationError(f"Missing signing configuration field: {e}", "INVALID_FORMAT")


def load_config_json(json_string: str) -> Dict[str, Any]:
    """
    Load a JSON configuration document.
    
    The document may hold "verification" and "signing" sections; each is
    returned as the corresponding config object when present.
    
    Returns:
        dict: {'verification': HttpSignatureConfig, 'signing': SignerConfig or None}
    """
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR")
    
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration JSON must be an object", "INVALID_FORMAT")
    
    signing = data.get('signing')
    return {
        'verification': HttpSignatureConfig.from_dict(data.get('verification', {})),
        'signing': SignerConfig.from_dict(signing) if signing else None,
    }
