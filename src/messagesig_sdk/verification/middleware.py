"""
Verification middleware for inbound HTTP requests

Framework-neutral request gate: it reads the signature headers from any
request object satisfying HttpRequest, runs the verifier, and either attaches
an HttpSignatureInfo to the request or returns the 401/500 challenge response
the caller should send.
"""

import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

from .types import (
    VerificationOptions,
    VerificationErrorCodes,
    ERROR_MESSAGES,
)
from .verifier import RFC9421Verifier
from ..algorithms import AlgorithmRegistry
from ..components import extract_component
from ..config.settings import HttpSignatureConfig
from ..jwks import KeyResolverCache
from ..parsing import parse_signature_input, parse_signature
from ..types import HttpRequest, HttpSignatureInfo

logger = logging.getLogger(__name__)

REALM = "api"


@dataclass
class HttpSigOptions:
    """
    Per-route verification options; unset values come from configuration

    Attributes:
        required: Components that must be covered by the signature
        jwks_url: JWKS URL for public keys
        max_age: Maximum signature age in seconds
        algorithms: Allowed algorithms (None allows all registered)
    """
    required: Optional[List[str]] = None
    jwks_url: Optional[str] = None
    max_age: Optional[int] = None
    algorithms: Optional[List[str]] = None


@dataclass
class ChallengeResponse:
    """Response the caller should send when a request is rejected"""
    status_code: int
    headers: Dict[str, str]
    body: Dict[str, str]

    @property
    def error(self) -> str:
        return self.body['error']


def build_challenge(
    error: str,
    required: List[str],
    missing: Optional[List[str]] = None
) -> str:
    """
    Build the WWW-Authenticate challenge value.

    Args:
        error: Error code (omitted from the challenge for signature_required)
        required: Components the route requires
        missing: Components the signature failed to cover

    Returns:
        str: Challenge, e.g. Signature realm="api", error="signature_expired"
    """
    challenge = f'Signature realm="{REALM}"'

    if error != VerificationErrorCodes.SIGNATURE_REQUIRED:
        challenge += f', error="{error}"'

    if missing:
        challenge += f', headers="{" ".join(missing)}"'
    elif error == VerificationErrorCodes.SIGNATURE_REQUIRED:
        challenge += f', headers="{" ".join(required)}"'

    return challenge


def create_challenge_response(
    error: str,
    message: str,
    required: List[str],
    missing: Optional[List[str]] = None
) -> ChallengeResponse:
    """Create a 401 response carrying the challenge and a JSON error body"""
    return ChallengeResponse(
        status_code=401,
        headers={'WWW-Authenticate': build_challenge(error, required, missing)},
        body={'error': error, 'message': message}
    )


class HttpSignatureMiddleware:
    """Middleware for verifying HTTP request signatures"""

    def __init__(
        self,
        options: Optional[HttpSigOptions] = None,
        config: Optional[HttpSignatureConfig] = None,
        registry: Optional[AlgorithmRegistry] = None,
        resolver_cache: Optional[KeyResolverCache] = None,
        verifier: Optional[RFC9421Verifier] = None
    ):
        """
        Initialize the middleware.

        Args:
            options: Route options overriding configuration
            config: Verification configuration (read from the environment if omitted)
            registry: Algorithm registry for the verifier
            resolver_cache: Resolver memoization shared across requests
            verifier: Preconstructed verifier
        """
        options = options or HttpSigOptions()
        config = config or HttpSignatureConfig.from_env()

        self.required = list(options.required if options.required is not None else config.required_components)
        self.jwks_url = options.jwks_url or config.jwks_url
        self.verification_options = VerificationOptions(
            max_age=options.max_age if options.max_age is not None else config.max_age,
            algorithms=options.algorithms if options.algorithms is not None else config.algorithms
        )
        self.resolver_cache = resolver_cache or KeyResolverCache(
            cache_lifespan=config.jwks_cache_lifespan,
            timeout=config.jwks_timeout
        )
        self.verifier = verifier or RFC9421Verifier(registry)

    async def __call__(self, request: HttpRequest) -> Optional[ChallengeResponse]:
        """
        Verify a request signature.

        Args:
            request: Inbound request

        Returns:
            None when the request is verified (request.http_signature is set),
            otherwise the ChallengeResponse to send
        """
        signature_header = extract_component(request, 'signature')
        signature_input_header = extract_component(request, 'signature-input')

        if not signature_header or not signature_input_header:
            return self._challenge(request, VerificationErrorCodes.SIGNATURE_REQUIRED)

        sig_inputs = parse_signature_input(signature_input_header)
        signatures = parse_signature(signature_header)

        if not sig_inputs or not signatures:
            return self._challenge(request, VerificationErrorCodes.INVALID_SIGNATURE, 'Invalid signature format')

        # Only the first declared signature is verified
        sig_input = sig_inputs[0]
        signature = next((s for s in signatures if s.label == sig_input.label), None)
        if signature is None:
            return self._challenge(request, VerificationErrorCodes.INVALID_SIGNATURE, 'Signature label mismatch')

        missing = [c for c in self.required if c not in sig_input.components]
        if missing:
            return self._challenge(
                request,
                VerificationErrorCodes.MISSING_COMPONENTS,
                f"Signature must cover: {', '.join(missing)}",
                missing
            )

        if not self.jwks_url:
            logger.error("HTTP signature verification requested but HTTP_SIG_JWKS_URL is not configured")
            return ChallengeResponse(
                status_code=500,
                headers={},
                body={
                    'error': VerificationErrorCodes.CONFIGURATION_ERROR,
                    'message': 'HTTP_SIG_JWKS_URL not configured'
                }
            )

        key_resolver = self.resolver_cache.get(self.jwks_url)
        result = await self.verifier.verify(
            request,
            sig_input,
            signature,
            key_resolver,
            self.verification_options
        )

        if not result.valid:
            error = result.error or VerificationErrorCodes.INVALID_SIGNATURE
            return self._challenge(request, error, key_id=sig_input.keyid)

        info = result.to_signature_info()
        attach_signature_info(request, info)
        logger.debug(f"Request {request.method} {request.url} signed by key {info.key_id}")
        return None

    def _challenge(
        self,
        request: HttpRequest,
        error: str,
        message: Optional[str] = None,
        missing: Optional[List[str]] = None,
        key_id: Optional[str] = None
    ) -> ChallengeResponse:
        message = message or ERROR_MESSAGES.get(error, 'Signature verification failed')
        logger.warning(
            f"Rejected {request.method} {request.url}: {error}"
            + (f" (key {key_id})" if key_id else "")
        )
        return create_challenge_response(error, message, self.required, missing)


def attach_signature_info(request: Any, info: HttpSignatureInfo) -> bool:
    """
    Attach verified signature info to a request object.

    Returns:
        bool: False if the request object does not accept attributes
    """
    try:
        setattr(request, 'http_signature', info)
        return True
    except AttributeError:
        logger.debug(f"Cannot attach signature info to {type(request).__name__}")
        return False


def create_http_signature_middleware(
    options: Optional[HttpSigOptions] = None,
    config: Optional[HttpSignatureConfig] = None,
    registry: Optional[AlgorithmRegistry] = None,
    resolver_cache: Optional[KeyResolverCache] = None
) -> HttpSignatureMiddleware:
    """
    Create request verification middleware.

    Args:
        options: Route options
        config: Verification configuration
        registry: Algorithm registry
        resolver_cache: Shared resolver cache

    Returns:
        HttpSignatureMiddleware: Configured middleware
    """
    return HttpSignatureMiddleware(options, config, registry, resolver_cache)
