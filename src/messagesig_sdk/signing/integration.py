"""
HTTP client integration for request signing

This module wraps a requests.Session so that every outgoing request carries
RFC 9421 signature headers produced by an RFC9421Signer.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from .rfc9421_signer import RFC9421Signer
from .types import SignRequestData, SignerOptions
from ..algorithms import AlgorithmRegistry
from ..config.settings import SignerConfig

logger = logging.getLogger(__name__)


class SigningSession:
    """
    HTTP session wrapper with automatic request signing.

    Signing failures propagate; an unsigned request is never sent in place of
    a signed one.
    """

    def __init__(
        self,
        signer: Optional[RFC9421Signer] = None,
        session: Optional[requests.Session] = None,
        auto_sign: bool = True
    ):
        """
        Initialize signing session.

        Args:
            signer: Signer used for outgoing requests
            session: Optional existing requests session to wrap
            auto_sign: Whether to sign requests automatically
        """
        self.session = session or requests.Session()
        self.signer = signer
        self.auto_sign = auto_sign

    def configure_signing(self, signer: RFC9421Signer, auto_sign: bool = True) -> None:
        """Replace the signer used by this session"""
        self.signer = signer
        self.auto_sign = auto_sign
        logger.info(f"Configured request signing for key ID: {signer.key_id}")

    def disable_signing(self) -> None:
        """Disable automatic request signing."""
        self.auto_sign = False
        logger.info("Disabled automatic request signing")

    def enable_signing(self) -> None:
        """Enable automatic request signing (if a signer is configured)."""
        if self.signer:
            self.auto_sign = True
            logger.info("Enabled automatic request signing")
        else:
            logger.warning("Cannot enable signing - no signer configured")

    def request(self, method: str, url: str, **kwargs) -> requests.Response:
        """
        Make an HTTP request, signing it first when enabled.

        Args:
            method: HTTP method
            url: Absolute request URL
            **kwargs: Additional arguments for requests

        Returns:
            requests.Response: HTTP response
        """
        if self.auto_sign and self.signer:
            kwargs = self._sign_request_kwargs(method, url, **kwargs)

        return self.session.request(method, url, **kwargs)

    def _sign_request_kwargs(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        """Sign the request and return kwargs carrying the signature headers"""
        headers = dict(kwargs.get('headers') or {})
        body = kwargs.get('data')

        # Serialize JSON ourselves so the digested bytes are the bytes sent
        if kwargs.get('json') is not None:
            body = json.dumps(kwargs.pop('json'))
            kwargs['data'] = body
            if 'content-type' not in {k.lower() for k in headers}:
                headers['Content-Type'] = 'application/json'

        if body is not None and not isinstance(body, (str, bytes)):
            logger.warning(f"Body of type {type(body).__name__} is not digested for {method} {url}")
            body = None

        signed_headers = self.signer.sign(SignRequestData(
            method=method.upper(),
            url=url,
            headers=headers,
            body=body
        ))

        kwargs['headers'] = signed_headers
        logger.debug(f"Signed {method} request to {url}")
        return kwargs

    def get(self, url: str, **kwargs) -> requests.Response:
        """Make GET request."""
        return self.request('GET', url, **kwargs)

    def post(self, url: str, **kwargs) -> requests.Response:
        """Make POST request."""
        return self.request('POST', url, **kwargs)

    def put(self, url: str, **kwargs) -> requests.Response:
        """Make PUT request."""
        return self.request('PUT', url, **kwargs)

    def patch(self, url: str, **kwargs) -> requests.Response:
        """Make PATCH request."""
        return self.request('PATCH', url, **kwargs)

    def delete(self, url: str, **kwargs) -> requests.Response:
        """Make DELETE request."""
        return self.request('DELETE', url, **kwargs)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self) -> 'SigningSession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def create_signer_from_config(
    config: SignerConfig,
    registry: Optional[AlgorithmRegistry] = None
) -> RFC9421Signer:
    """Create a signer from loaded signing configuration"""
    return RFC9421Signer(
        SignerOptions(
            key_id=config.key_id,
            private_key=config.private_key_pem,
            algorithm=config.algorithm,
            components=list(config.components)
        ),
        registry
    )


def create_signing_session(
    config: Optional[SignerConfig] = None,
    session: Optional[requests.Session] = None,
    registry: Optional[AlgorithmRegistry] = None
) -> SigningSession:
    """
    Create a signing session.

    Args:
        config: Signing configuration (read from the environment if omitted)
        session: Optional requests session to wrap
        registry: Optional algorithm registry

    Returns:
        SigningSession: Session that signs every request
    """
    config = config or SignerConfig.from_env()
    return SigningSession(create_signer_from_config(config, registry), session)
