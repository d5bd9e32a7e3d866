"""
Shared fixtures for the message signatures test suite
"""

import pytest
from typing import Dict, Optional, Tuple

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from messagesig_sdk.parsing import parse_signature_input, parse_signature
from messagesig_sdk.signing import RFC9421Signer, SignRequestData
from messagesig_sdk.types import IncomingRequest, ParsedSignatureInput, ParsedSignature


class StaticKeyResolver:
    """Key resolver returning fixed keys by key id"""

    def __init__(self, keys: Dict[str, object]):
        self.keys = keys
        self.calls = []

    async def resolve(self, key_id: str, algorithm: str):
        self.calls.append((key_id, algorithm))
        if key_id not in self.keys:
            raise LookupError(f"unknown key {key_id}")
        return self.keys[key_id]


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_public_key(rsa_private_key):
    return rsa_private_key.public_key()


@pytest.fixture(scope="session")
def other_rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_private_pem(rsa_private_key) -> str:
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    ).decode('ascii')


@pytest.fixture
def key_resolver(rsa_public_key):
    return StaticKeyResolver({'client-key-1': rsa_public_key})


def to_incoming(
    signer: RFC9421Signer,
    request: SignRequestData
) -> Tuple[IncomingRequest, ParsedSignatureInput, ParsedSignature]:
    """Sign an outgoing request and return what the receiving side sees"""
    headers = signer.sign(request)
    incoming = IncomingRequest.from_url(request.method, request.url, headers, request.body)
    sig_input = parse_signature_input(headers['Signature-Input'])[0]
    signature = parse_signature(headers['Signature'])[0]
    return incoming, sig_input, signature


def make_request(
    method: str = "GET",
    url: str = "/api/data",
    hostname: str = "api.example.com",
    headers: Optional[Dict[str, str]] = None
) -> IncomingRequest:
    return IncomingRequest(method=method, url=url, hostname=hostname, protocol="https", headers=headers or {})
