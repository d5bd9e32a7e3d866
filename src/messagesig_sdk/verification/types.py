"""
Type definitions for signature verification

This module provides the verification result, options and the closed set of
verification error codes.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass, field

from ..config.settings import DEFAULT_MAX_AGE, DEFAULT_REQUIRED_COMPONENTS
from ..types import HttpSignatureInfo


MAX_CLOCK_SKEW = 60  # seconds a created timestamp may lie in the future


class VerificationErrorCodes:
    """Error codes reported by verification"""

    SIGNATURE_REQUIRED = "signature_required"
    INVALID_SIGNATURE = "invalid_signature"
    MISSING_COMPONENTS = "missing_components"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    ALGORITHM_NOT_ALLOWED = "algorithm_not_allowed"
    SIGNATURE_EXPIRED = "signature_expired"
    SIGNATURE_FUTURE = "signature_future"
    KEY_NOT_FOUND = "key_not_found"
    VERIFICATION_FAILED = "verification_failed"
    CONFIGURATION_ERROR = "configuration_error"


ERROR_MESSAGES: Dict[str, str] = {
    VerificationErrorCodes.SIGNATURE_REQUIRED: 'Request signature required',
    VerificationErrorCodes.UNSUPPORTED_ALGORITHM: 'Unsupported signature algorithm',
    VerificationErrorCodes.ALGORITHM_NOT_ALLOWED: 'Signature algorithm not allowed',
    VerificationErrorCodes.SIGNATURE_EXPIRED: 'Signature has expired',
    VerificationErrorCodes.SIGNATURE_FUTURE: 'Signature timestamp is in the future',
    VerificationErrorCodes.KEY_NOT_FOUND: 'Signing key not found',
    VerificationErrorCodes.INVALID_SIGNATURE: 'Signature verification failed',
    VerificationErrorCodes.VERIFICATION_FAILED: 'Signature verification failed',
}


@dataclass
class VerificationOptions:
    """
    Per-call verification options

    Attributes:
        max_age: Maximum signature age in seconds, measured from created
        algorithms: Optional allow-list of algorithm names (None allows all registered)
    """
    max_age: int = DEFAULT_MAX_AGE
    algorithms: Optional[List[str]] = None

    def __post_init__(self):
        """Validate options"""
        if self.max_age < 0:
            raise ValueError("Max age cannot be negative")


@dataclass
class VerificationResult:
    """
    Outcome of verifying one signature

    On success key_id, algorithm, components and created echo the signature
    input. On failure only error is set.
    """
    valid: bool
    key_id: Optional[str] = None
    algorithm: Optional[str] = None
    components: List[str] = field(default_factory=list)
    created: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, error_code: str) -> 'VerificationResult':
        """Create a failed result"""
        return cls(valid=False, error=error_code)

    @property
    def message(self) -> Optional[str]:
        """Human readable message for the error code"""
        if self.error is None:
            return None
        return ERROR_MESSAGES.get(self.error, 'Signature verification failed')

    def to_signature_info(self) -> HttpSignatureInfo:
        """
        Convert a successful result into the request-scoped signature record.

        Raises:
            ValueError: If the result is not valid
        """
        if not self.valid or self.key_id is None or self.algorithm is None:
            raise ValueError("Only a valid verification result carries signature info")

        return HttpSignatureInfo(
            key_id=self.key_id,
            algorithm=self.algorithm,
            components=list(self.components),
            created=self.created
        )
