"""
Parsing of the RFC 9421 Signature-Input and Signature headers

Both parsers tolerate several comma-separated signatures in one header value
and never raise: malformed entries are dropped and whatever could be decoded
is returned.
"""

import base64
import binascii
import logging
import re
from typing import List, Optional

from .types import ParsedSignatureInput, ParsedSignature

logger = logging.getLogger(__name__)

_LABEL_PATTERN = re.compile(r'^([a-zA-Z][a-zA-Z0-9_-]*)=\(([^)]*)\)')
_COMPONENT_PATTERN = re.compile(r'"([^"]+)"')
_KEYID_PATTERN = re.compile(r';keyid="([^"]+)"')
_ALG_PATTERN = re.compile(r';alg="([^"]+)"')
_CREATED_PATTERN = re.compile(r';created=(\d+)')
_EXPIRES_PATTERN = re.compile(r';expires=(\d+)')
_NONCE_PATTERN = re.compile(r';nonce="([^"]+)"')

_SIGNATURE_PATTERN = re.compile(r'([a-zA-Z][a-zA-Z0-9_-]*)=:([A-Za-z0-9+/=]+):')


def parse_signature_input(header: str) -> List[ParsedSignatureInput]:
    """
    Parse a Signature-Input header value.

    Args:
        header: Raw header value, possibly holding several signatures

    Returns:
        list: Parsed entries in header order; entries without keyid or alg,
        or not matching label=(...), are dropped
    """
    results: List[ParsedSignatureInput] = []

    for segment in split_signatures(header or ''):
        parsed = _parse_single_signature_input(segment.strip())
        if parsed is not None:
            results.append(parsed)
        else:
            logger.debug(f"Dropped unparsable Signature-Input entry: {segment.strip()!r}")

    return results


def split_signatures(header: str) -> List[str]:
    """
    Split a header value on top-level commas.

    Commas inside a parenthesized component list or a quoted string do not
    separate signatures.
    """
    results: List[str] = []
    current = ''
    paren_depth = 0
    in_quotes = False
    previous = ''

    for char in header:
        if char == '"' and previous != '\\':
            in_quotes = not in_quotes
        elif char == '(' and not in_quotes:
            paren_depth += 1
        elif char == ')' and not in_quotes:
            paren_depth -= 1
        elif char == ',' and not in_quotes and paren_depth == 0:
            results.append(current)
            current = ''
            previous = char
            continue

        current += char
        previous = char

    if current:
        results.append(current)

    return results


def _parse_single_signature_input(value: str) -> Optional[ParsedSignatureInput]:
    label_match = _LABEL_PATTERN.match(value)
    if not label_match:
        return None

    label, components_str = label_match.groups()
    components = _COMPONENT_PATTERN.findall(components_str)

    params = value[label_match.end():]

    keyid_match = _KEYID_PATTERN.search(params)
    alg_match = _ALG_PATTERN.search(params)
    if not keyid_match or not alg_match:
        return None

    created_match = _CREATED_PATTERN.search(params)
    expires_match = _EXPIRES_PATTERN.search(params)
    nonce_match = _NONCE_PATTERN.search(params)

    return ParsedSignatureInput(
        label=label,
        components=components,
        keyid=keyid_match.group(1),
        alg=alg_match.group(1),
        created=int(created_match.group(1)) if created_match else None,
        expires=int(expires_match.group(1)) if expires_match else None,
        nonce=nonce_match.group(1) if nonce_match else None,
    )


def parse_signature(header: str) -> List[ParsedSignature]:
    """
    Parse a Signature header value.

    Args:
        header: Raw header value of the form label=:base64:[, label2=:base64:]

    Returns:
        list: Decoded signatures; entries with invalid base64 are skipped
    """
    results: List[ParsedSignature] = []

    for match in _SIGNATURE_PATTERN.finditer(header or ''):
        label, encoded = match.groups()
        # Missing "=" padding is tolerated
        padded = encoded + '=' * (-len(encoded) % 4)
        try:
            value = base64.b64decode(padded, validate=True)
        except (binascii.Error, ValueError):
            logger.debug(f"Skipped signature {label} with invalid base64")
            continue

        results.append(ParsedSignature(label=label, value=value))

    return results
