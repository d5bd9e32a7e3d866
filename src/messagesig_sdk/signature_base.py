"""
Signature base construction for RFC 9421 HTTP Message Signatures

This module builds the canonical signature base string that is signed on the
outbound path and rebuilt for verification on the inbound path. Both paths
share the same line assembly so that equivalent inputs produce byte-identical
output.
"""

import logging
from typing import Callable, List, Mapping, Optional

from .types import HttpRequest, ParsedSignatureInput
from .components import extract_component, extract_outgoing_component

logger = logging.getLogger(__name__)

ComponentExtractor = Callable[[str], Optional[str]]


def encode_signature_component(name: str, value: str) -> str:
    """Format one signature base line: "<name>": <value>"""
    return f'"{name}": {value}'


def build_signature_params(sig_input: ParsedSignatureInput) -> str:
    """
    Build the @signature-params value.

    Parameter order is fixed: keyid, alg, then created, expires and nonce when
    present.

    Args:
        sig_input: Signature parameters

    Returns:
        str: Signature params value, e.g. ("@method");keyid="k";alg="a";created=1
    """
    components_list = ' '.join(f'"{c}"' for c in sig_input.components)
    params = f'({components_list})'

    params += f';keyid="{sig_input.keyid}"'
    params += f';alg="{sig_input.alg}"'

    if sig_input.created is not None:
        params += f';created={sig_input.created}'
    if sig_input.expires is not None:
        params += f';expires={sig_input.expires}'
    if sig_input.nonce is not None:
        params += f';nonce="{sig_input.nonce}"'

    return params


def assemble_signature_base(sig_input: ParsedSignatureInput, extractor: ComponentExtractor) -> str:
    """
    Assemble the signature base from a component extractor.

    Components whose value cannot be resolved are left out of the base; the
    @signature-params line still lists every declared component.

    Args:
        sig_input: Signature parameters with the ordered component list
        extractor: Callable returning a component's value or None

    Returns:
        str: Newline-joined signature base
    """
    lines: List[str] = []

    for component in sig_input.components:
        value = extractor(component)
        if value is None:
            # TODO: fail when a required component cannot be resolved instead of skipping it
            logger.debug(f"Component {component} not present, omitted from signature base")
            continue
        lines.append(encode_signature_component(component, value))

    lines.append(encode_signature_component('@signature-params', build_signature_params(sig_input)))

    return '\n'.join(lines)


def build_signature_base(request: HttpRequest, sig_input: ParsedSignatureInput) -> str:
    """
    Build the signature base for an inbound request.

    Args:
        request: Request being verified
        sig_input: Parsed Signature-Input entry

    Returns:
        str: Signature base string
    """
    return assemble_signature_base(sig_input, lambda c: extract_component(request, c))


def build_outgoing_signature_base(
    method: str,
    url: str,
    headers: Mapping[str, str],
    sig_input: ParsedSignatureInput
) -> str:
    """
    Build the signature base for an outbound request description.

    Args:
        method: HTTP method
        url: Absolute request URL
        headers: Outgoing headers, including any computed Content-Digest
        sig_input: Signature parameters to sign

    Returns:
        str: Signature base string
    """
    return assemble_signature_base(
        sig_input,
        lambda c: extract_outgoing_component(method, url, headers, c)
    )
