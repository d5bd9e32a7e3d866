"""
RFC 9421 HTTP Message Signatures signer

This module provides the outbound signer: it binds a private key, key id,
algorithm and component list once, then produces Signature-Input, Signature
and (when covered) Content-Digest headers for each outgoing request.
"""

import logging
from typing import Callable, Dict, Optional

from .types import (
    SignRequestData,
    SignerOptions,
    SigningError,
    SigningErrorCodes,
    SIGNATURE_LABEL,
)
from .utils import (
    calculate_content_digest,
    generate_timestamp,
    import_private_key,
    to_base64,
    validate_url,
)
from ..algorithms import AlgorithmRegistry, create_default_registry
from ..signature_base import build_outgoing_signature_base, build_signature_params
from ..types import ParsedSignatureInput

logger = logging.getLogger(__name__)


class RFC9421Signer:
    """
    RFC 9421 HTTP Message Signatures signer

    Immutable after construction; each sign() call generates its own created
    timestamp.
    """

    def __init__(
        self,
        options: SignerOptions,
        registry: Optional[AlgorithmRegistry] = None,
        timestamp_generator: Optional[Callable[[], int]] = None
    ):
        """
        Initialize the signer.

        Args:
            options: Signer options
            registry: Algorithm registry (built-in algorithms if omitted)
            timestamp_generator: Optional clock override returning Unix seconds

        Raises:
            SigningError: If the algorithm is not registered
            KeyImportError: If PEM key material cannot be imported
        """
        registry = registry if registry is not None else create_default_registry()

        algorithm = registry.get(options.algorithm)
        if algorithm is None:
            raise SigningError(
                f"Unsupported algorithm: {options.algorithm}",
                SigningErrorCodes.UNSUPPORTED_ALGORITHM,
                {"available_algorithms": registry.list()}
            )

        if isinstance(options.private_key, str):
            self._private_key = import_private_key(options.private_key, options.algorithm)
        else:
            self._private_key = options.private_key

        self._algorithm = algorithm
        self.key_id = options.key_id
        self.algorithm = options.algorithm
        self.components = tuple(options.components)
        self._timestamp_generator = timestamp_generator or generate_timestamp

    def sign(self, request: SignRequestData) -> Dict[str, str]:
        """
        Sign an outgoing request.

        Args:
            request: Request description

        Returns:
            dict: Original headers plus Content-Digest (when covered and a body
            is present), Signature-Input and Signature

        Raises:
            SigningError: If the URL is not absolute or the algorithm fails
        """
        validate_url(request.url)

        headers: Dict[str, str] = dict(request.headers)

        if request.body and 'content-digest' in self.components:
            headers['Content-Digest'] = calculate_content_digest(request.body)

        sig_input = ParsedSignatureInput(
            label=SIGNATURE_LABEL,
            components=list(self.components),
            keyid=self.key_id,
            alg=self.algorithm,
            created=self._timestamp_generator()
        )

        signature_base = build_outgoing_signature_base(request.method, request.url, headers, sig_input)

        try:
            signature = self._algorithm.sign(self._private_key, signature_base.encode('utf-8'))
        except Exception as e:
            raise SigningError(
                f"Request signing failed: {e}",
                SigningErrorCodes.SIGNING_FAILED,
                {"algorithm": self.algorithm, "key_id": self.key_id}
            ) from e

        headers['Signature-Input'] = f"{SIGNATURE_LABEL}={build_signature_params(sig_input)}"
        headers['Signature'] = f"{SIGNATURE_LABEL}=:{to_base64(signature)}:"

        logger.debug(f"Signed {request.method} {request.url} with key {self.key_id} ({self.algorithm})")
        return headers

    def __repr__(self) -> str:
        return f"RFC9421Signer(key_id='{self.key_id}', algorithm='{self.algorithm}', components={list(self.components)})"


def create_signer(options: SignerOptions, registry: Optional[AlgorithmRegistry] = None) -> RFC9421Signer:
    """
    Create a new RFC 9421 signer.

    Args:
        options: Signer options
        registry: Optional algorithm registry

    Returns:
        RFC9421Signer: Configured signer instance
    """
    return RFC9421Signer(options, registry)


def sign_request(
    request: SignRequestData,
    options: SignerOptions,
    registry: Optional[AlgorithmRegistry] = None
) -> Dict[str, str]:
    """
    Sign a request with a one-off signer.

    Args:
        request: Request to sign
        options: Signer options
        registry: Optional algorithm registry

    Returns:
        dict: Signed headers
    """
    signer = create_signer(options, registry)
    return signer.sign(request)
