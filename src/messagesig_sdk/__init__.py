"""
Message Signatures Python SDK
RFC 9421 HTTP Message Signatures signing and verification
"""

from .version import __version__
from .types import (
    HttpRequest,
    IncomingRequest,
    ParsedSignatureInput,
    ParsedSignature,
    HttpSignatureInfo,
    KeyHandle,
)
from .components import (
    extract_component,
    extract_outgoing_component,
)
from .signature_base import (
    build_signature_base,
    build_outgoing_signature_base,
    build_signature_params,
)
from .parsing import (
    parse_signature_input,
    parse_signature,
)
from .algorithms import (
    SignatureAlgorithm,
    AlgorithmRegistry,
    create_default_registry,
    to_jose_algorithm,
)
from .jwks import (
    KeyResolver,
    JwksKeyResolver,
    KeyResolverCache,
    create_key_resolver,
)
from .exceptions import (
    MessageSigSDKError,
    ConfigurationError,
    KeyImportError,
    KeyResolutionError,
)
from .config import (
    HttpSignatureConfig,
    SignerConfig,
    load_config_json,
)
from .verification import (
    RFC9421Verifier,
    VerificationResult,
    VerificationOptions,
    VerificationErrorCodes,
    HttpSigOptions,
    HttpSignatureMiddleware,
    ChallengeResponse,
    create_verifier,
    verify_signature,
    create_http_signature_middleware,
)
from .signing import (
    RFC9421Signer,
    SignRequestData,
    SignerOptions,
    SigningError,
    SigningSession,
    create_signer,
    sign_request,
    create_signing_session,
)

__all__ = [
    '__version__',
    # Request and header types
    'HttpRequest',
    'IncomingRequest',
    'ParsedSignatureInput',
    'ParsedSignature',
    'HttpSignatureInfo',
    'KeyHandle',
    # Signature base
    'extract_component',
    'extract_outgoing_component',
    'build_signature_base',
    'build_outgoing_signature_base',
    'build_signature_params',
    # Parsing
    'parse_signature_input',
    'parse_signature',
    # Algorithms
    'SignatureAlgorithm',
    'AlgorithmRegistry',
    'create_default_registry',
    'to_jose_algorithm',
    # Key resolution
    'KeyResolver',
    'JwksKeyResolver',
    'KeyResolverCache',
    'create_key_resolver',
    # Exceptions
    'MessageSigSDKError',
    'ConfigurationError',
    'KeyImportError',
    'KeyResolutionError',
    # Configuration
    'HttpSignatureConfig',
    'SignerConfig',
    'load_config_json',
    # Verification
    'RFC9421Verifier',
    'VerificationResult',
    'VerificationOptions',
    'VerificationErrorCodes',
    'HttpSigOptions',
    'HttpSignatureMiddleware',
    'ChallengeResponse',
    'create_verifier',
    'verify_signature',
    'create_http_signature_middleware',
    # Signing
    'RFC9421Signer',
    'SignRequestData',
    'SignerOptions',
    'SigningError',
    'SigningSession',
    'create_signer',
    'sign_request',
    'create_signing_session',
]
