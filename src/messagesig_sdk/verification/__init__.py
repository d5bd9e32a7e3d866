"""
Signature verification module
Implements RFC 9421 HTTP Message Signatures verification

This module provides:
- The verifier state machine (algorithm, freshness, key and cryptographic checks)
- Framework-neutral request verification middleware
"""

from .types import (
    VerificationResult,
    VerificationOptions,
    VerificationErrorCodes,
    ERROR_MESSAGES,
    MAX_CLOCK_SKEW,
    DEFAULT_MAX_AGE,
    DEFAULT_REQUIRED_COMPONENTS,
)

from .verifier import (
    RFC9421Verifier,
    create_verifier,
    verify_signature,
)

from .middleware import (
    HttpSigOptions,
    HttpSignatureMiddleware,
    ChallengeResponse,
    build_challenge,
    create_challenge_response,
    create_http_signature_middleware,
    attach_signature_info,
)

__all__ = [
    # Types
    'VerificationResult',
    'VerificationOptions',
    'VerificationErrorCodes',
    'ERROR_MESSAGES',
    'MAX_CLOCK_SKEW',
    'DEFAULT_MAX_AGE',
    'DEFAULT_REQUIRED_COMPONENTS',
    
    # Core verifier
    'RFC9421Verifier',
    'create_verifier',
    'verify_signature',
    
    # Middleware
    'HttpSigOptions',
    'HttpSignatureMiddleware',
    'ChallengeResponse',
    'build_challenge',
    'create_challenge_response',
    'create_http_signature_middleware',
    'attach_signature_info',
]
