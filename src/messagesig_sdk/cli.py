"""
Command-line interface for the message signatures SDK
Signs request descriptions and inspects signature headers
"""

import argparse
import json
import sys
from dataclasses import asdict
from typing import Dict, List, Optional

from . import __version__
from .algorithms import create_default_registry
from .exceptions import MessageSigSDKError
from .parsing import parse_signature_input, parse_signature
from .signing import RFC9421Signer, SignRequestData, SignerOptions, SigningError
from .config.settings import DEFAULT_SIGNING_ALGORITHM, DEFAULT_SIGNING_COMPONENTS


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='messagesig',
        description='RFC 9421 HTTP Message Signatures command-line interface'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Message Signatures Python SDK {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_sign_parser(subparsers)
    setup_parse_parser(subparsers)
    subparsers.add_parser('algorithms', help='List registered signature algorithms')

    return parser


def setup_sign_parser(subparsers):
    """Setup sign subcommand."""
    sign_parser = subparsers.add_parser('sign', help='Sign a request and print the resulting headers')
    sign_parser.add_argument('method', help='HTTP method')
    sign_parser.add_argument('url', help='Absolute request URL')
    sign_parser.add_argument('--key-file', required=True, help='PEM private key file')
    sign_parser.add_argument('--key-id', required=True, help='Key identifier (keyid parameter)')
    sign_parser.add_argument(
        '--algorithm',
        default=DEFAULT_SIGNING_ALGORITHM,
        help=f'Signature algorithm (default: {DEFAULT_SIGNING_ALGORITHM})'
    )
    sign_parser.add_argument(
        '--component',
        action='append',
        dest='components',
        help='Component to cover; repeat in order (default: '
             f'{" ".join(DEFAULT_SIGNING_COMPONENTS)})'
    )
    sign_parser.add_argument(
        '-H', '--header',
        action='append',
        dest='headers',
        default=[],
        help='Request header as "Name: value"; may be repeated'
    )
    sign_parser.add_argument('--data', help='Request body')


def setup_parse_parser(subparsers):
    """Setup parse subcommand."""
    parse_parser = subparsers.add_parser('parse', help='Parse Signature-Input and Signature header values')
    parse_parser.add_argument('--signature-input', help='Signature-Input header value')
    parse_parser.add_argument('--signature', help='Signature header value')


def parse_header_args(values: List[str]) -> Dict[str, str]:
    """
    Parse "Name: value" arguments into a header dictionary.

    Raises:
        ValueError: If an argument has no colon
    """
    headers = {}
    for value in values:
        name, sep, header_value = value.partition(':')
        if not sep or not name.strip():
            raise ValueError(f"Invalid header (expected 'Name: value'): {value}")
        headers[name.strip()] = header_value.strip()
    return headers


def handle_sign_command(args) -> int:
    """Handle sign command."""
    try:
        with open(args.key_file, 'r', encoding='utf-8') as fh:
            private_key = fh.read()

        signer = RFC9421Signer(SignerOptions(
            key_id=args.key_id,
            private_key=private_key,
            algorithm=args.algorithm,
            components=args.components or list(DEFAULT_SIGNING_COMPONENTS)
        ))

        headers = signer.sign(SignRequestData(
            method=args.method.upper(),
            url=args.url,
            headers=parse_header_args(args.headers),
            body=args.data
        ))

        print(json.dumps(headers, indent=2))
        return 0

    except OSError as e:
        print(f"Error reading key file: {e}", file=sys.stderr)
        return 1
    except (MessageSigSDKError, SigningError, ValueError) as e:
        print(f"Error signing request: {e}", file=sys.stderr)
        return 1


def handle_parse_command(args) -> int:
    """Handle parse command."""
    if not args.signature_input and not args.signature:
        print("Error: Provide --signature-input and/or --signature", file=sys.stderr)
        return 1

    output = {}
    if args.signature_input:
        output['signature_input'] = [asdict(entry) for entry in parse_signature_input(args.signature_input)]
    if args.signature:
        output['signature'] = [
            {'label': entry.label, 'length': len(entry.value), 'hex': entry.value.hex()}
            for entry in parse_signature(args.signature)
        ]

    print(json.dumps(output, indent=2))
    return 0


def handle_algorithms_command(args) -> int:
    """Handle algorithms command."""
    for name in create_default_registry().list():
        print(name)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == 'sign':
            return handle_sign_command(args)
        elif args.command == 'parse':
            return handle_parse_command(args)
        elif args.command == 'algorithms':
            return handle_algorithms_command(args)
        else:
            # No command specified, show help
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
