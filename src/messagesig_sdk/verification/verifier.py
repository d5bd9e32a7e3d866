"""
Core signature verification for RFC 9421 HTTP Message Signatures

The verifier runs a fixed sequence of checks and stops at the first failure:
algorithm known, algorithm allowed, freshness, explicit expiry, key
resolution, then the cryptographic check. Every outcome is returned as a
VerificationResult; nothing is raised to the caller.
"""

import logging
import time
from typing import Callable, Optional

from .types import (
    VerificationResult,
    VerificationOptions,
    VerificationErrorCodes,
    MAX_CLOCK_SKEW,
)
from ..algorithms import AlgorithmRegistry, create_default_registry
from ..jwks import KeyResolver
from ..signature_base import build_signature_base
from ..types import HttpRequest, ParsedSignatureInput, ParsedSignature

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def _current_time() -> int:
    return int(time.time())


class RFC9421Verifier:
    """
    RFC 9421 HTTP Message Signatures verifier

    Holds the algorithm registry and clock; per-request state is passed by
    argument only, so one verifier can serve concurrent requests.
    """

    def __init__(self, registry: Optional[AlgorithmRegistry] = None, clock: Optional[Clock] = None):
        """
        Initialize the verifier.

        Args:
            registry: Algorithm registry (built-in algorithms if omitted)
            clock: Callable returning the current Unix time in seconds
        """
        self.registry = registry if registry is not None else create_default_registry()
        self.clock = clock or _current_time

    async def verify(
        self,
        request: HttpRequest,
        sig_input: ParsedSignatureInput,
        signature: ParsedSignature,
        key_resolver: KeyResolver,
        options: Optional[VerificationOptions] = None
    ) -> VerificationResult:
        """
        Verify one signature against a request.

        Args:
            request: Inbound request
            sig_input: Parsed Signature-Input entry
            signature: Signature entry with the same label
            key_resolver: Resolver for the signer's public key
            options: Freshness and allow-list options

        Returns:
            VerificationResult: Valid result, or a failure carrying one error code
        """
        options = options or VerificationOptions()

        algorithm = self.registry.get(sig_input.alg)
        if algorithm is None:
            return self._reject(sig_input, VerificationErrorCodes.UNSUPPORTED_ALGORITHM)

        if options.algorithms is not None and sig_input.alg not in options.algorithms:
            return self._reject(sig_input, VerificationErrorCodes.ALGORITHM_NOT_ALLOWED)

        now = self.clock()

        if sig_input.created is not None:
            age = now - sig_input.created
            if age > options.max_age:
                return self._reject(sig_input, VerificationErrorCodes.SIGNATURE_EXPIRED)
            if age < -MAX_CLOCK_SKEW:
                return self._reject(sig_input, VerificationErrorCodes.SIGNATURE_FUTURE)

        if sig_input.expires is not None and now > sig_input.expires:
            return self._reject(sig_input, VerificationErrorCodes.SIGNATURE_EXPIRED)

        try:
            public_key = await key_resolver.resolve(sig_input.keyid, sig_input.alg)
        except Exception as e:
            logger.warning(f"Could not resolve key {sig_input.keyid}: {e}")
            return self._reject(sig_input, VerificationErrorCodes.KEY_NOT_FOUND)

        signature_base = build_signature_base(request, sig_input)

        try:
            valid = algorithm.verify(public_key, signature.value, signature_base.encode('utf-8'))
        except Exception as e:
            logger.warning(f"Verification with {sig_input.alg} raised for key {sig_input.keyid}: {e}")
            return self._reject(sig_input, VerificationErrorCodes.VERIFICATION_FAILED)

        if not valid:
            return self._reject(sig_input, VerificationErrorCodes.INVALID_SIGNATURE)

        logger.debug(f"Verified signature {sig_input.label} from key {sig_input.keyid}")
        return VerificationResult(
            valid=True,
            key_id=sig_input.keyid,
            algorithm=sig_input.alg,
            components=list(sig_input.components),
            created=sig_input.created
        )

    def _reject(self, sig_input: ParsedSignatureInput, error_code: str) -> VerificationResult:
        logger.debug(f"Signature {sig_input.label} (key {sig_input.keyid}) rejected: {error_code}")
        return VerificationResult.failure(error_code)


def create_verifier(registry: Optional[AlgorithmRegistry] = None, clock: Optional[Clock] = None) -> RFC9421Verifier:
    """
    Create a new RFC 9421 verifier.

    Args:
        registry: Algorithm registry
        clock: Optional clock override

    Returns:
        RFC9421Verifier: Configured verifier instance
    """
    return RFC9421Verifier(registry, clock)


async def verify_signature(
    request: HttpRequest,
    sig_input: ParsedSignatureInput,
    signature: ParsedSignature,
    key_resolver: KeyResolver,
    options: Optional[VerificationOptions] = None,
    registry: Optional[AlgorithmRegistry] = None
) -> VerificationResult:
    """
    Verify one signature with a one-off verifier.

    Args:
        request: Inbound request
        sig_input: Parsed Signature-Input entry
        signature: Matching Signature entry
        key_resolver: Public key resolver
        options: Verification options
        registry: Optional algorithm registry

    Returns:
        VerificationResult: Verification outcome
    """
    verifier = create_verifier(registry)
    return await verifier.verify(request, sig_input, signature, key_resolver, options)
