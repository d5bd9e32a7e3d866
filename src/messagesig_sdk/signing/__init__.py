"""
Request Signing Module

RFC 9421 HTTP Message Signatures signing for outgoing requests, with RSA-PSS
and RSA PKCS#1 v1.5 algorithms.
"""

from .types import (
    SignRequestData,
    SignerOptions,
    SigningError,
    SigningErrorCodes,
    SIGNATURE_LABEL,
)

from .rfc9421_signer import (
    RFC9421Signer,
    create_signer,
    sign_request,
)

from .utils import (
    calculate_content_digest,
    generate_timestamp,
    import_private_key,
)

from .integration import (
    SigningSession,
    create_signing_session,
    create_signer_from_config,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'RFC9421Signer',
    'create_signer',
    'sign_request',
    # Types
    'SignRequestData',
    'SignerOptions',
    'SigningError',
    'SigningErrorCodes',
    'SIGNATURE_LABEL',
    # Utilities
    'calculate_content_digest',
    'generate_timestamp',
    'import_private_key',
    # HTTP Integration
    'SigningSession',
    'create_signing_session',
    'create_signer_from_config',
]
