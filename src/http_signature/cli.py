"""
Command-line interface for the HTTP Signature SDK
Signs a request description or verifies a signed one
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from . import __version__
from .exceptions import HttpSignatureError
from .signing import SignableRequest, SigningOptions, sign_request
from .signing.types import AUTHORIZATION_HEADER
from .verification import ParseOptions, parse_request, verify_hmac, verify_signature


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='http-signature',
        description='Sign and verify HTTP requests with HTTP Signatures'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'HTTP Signature SDK {__version__}'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    setup_sign_parser(subparsers)
    setup_verify_parser(subparsers)

    return parser


def _add_request_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--method', default='GET', help='HTTP method (default: GET)')
    parser.add_argument('--path', default='/', help='Request path including query (default: /)')
    parser.add_argument(
        '--header',
        action='append',
        default=[],
        metavar='"NAME: VALUE"',
        help='Request header; may be repeated'
    )


def setup_sign_parser(subparsers):
    """Setup sign subcommand."""
    sign_parser = subparsers.add_parser('sign', help='Sign a request and print its signature header')
    _add_request_arguments(sign_parser)
    key_group = sign_parser.add_mutually_exclusive_group(required=True)
    key_group.add_argument('--key', help='Path to a private key file')
    key_group.add_argument('--secret', help='HMAC shared secret')
    sign_parser.add_argument('--key-id', required=True, help='Key identifier')
    sign_parser.add_argument('--algorithm', help='Algorithm, e.g. rsa-sha256 (required with --secret)')
    sign_parser.add_argument('--passphrase', help='Passphrase for an encrypted private key')
    sign_parser.add_argument(
        '--sign-headers',
        help='Space-separated headers to sign, e.g. "(request-target) date"'
    )
    sign_parser.add_argument('--opaque', help='Opaque value to include')
    sign_parser.add_argument('--expires-in', type=int, help='Seconds until (expires)')
    sign_parser.add_argument('--strict', action='store_true', help='Reject request-line')
    sign_parser.add_argument('--hide-algorithm', action='store_true', help='Emit hs2019 as the algorithm')
    sign_parser.add_argument(
        '--header-name',
        default=AUTHORIZATION_HEADER,
        help='Header to write the signature to (default: Authorization)'
    )


def setup_verify_parser(subparsers):
    """Setup verify subcommand."""
    verify_parser = subparsers.add_parser('verify', help='Verify a signed request')
    _add_request_arguments(verify_parser)
    key_group = verify_parser.add_mutually_exclusive_group(required=True)
    key_group.add_argument('--key', help='Path to a public key file')
    key_group.add_argument('--secret', help='HMAC shared secret')
    verify_parser.add_argument('--clock-skew', type=int, default=300, help='Allowed clock skew in seconds')
    verify_parser.add_argument(
        '--require-headers',
        help='Space-separated headers that must be signed (default: date)'
    )
    verify_parser.add_argument('--strict', action='store_true', help='Reject request-line')


def parse_header_arguments(values: List[str]) -> Dict[str, str]:
    """Turn repeated "Name: value" arguments into a header dict."""
    headers: Dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition(':')
        if not sep or not name.strip():
            raise ValueError(f"Invalid header (expected 'Name: value'): {item}")
        headers[name.strip()] = value.strip()
    return headers


def handle_sign_command(args) -> int:
    """Handle sign command."""
    if args.secret is not None:
        key = args.secret
        if not args.algorithm:
            print("Error: --algorithm is required with --secret", file=sys.stderr)
            return 1
    else:
        key = Path(args.key).read_bytes()

    request = SignableRequest(
        method=args.method.upper(),
        path=args.path,
        headers=parse_header_arguments(args.header),
    )
    options = SigningOptions(
        key=key,
        key_id=args.key_id,
        algorithm=args.algorithm,
        headers=args.sign_headers.split() if args.sign_headers else None,
        strict=args.strict,
        expires_in=args.expires_in,
        key_passphrase=args.passphrase,
        hide_algorithm=args.hide_algorithm,
        opaque=args.opaque,
        authorization_header_name=args.header_name,
    )
    sign_request(request, options)

    print(f"Date: {request.get_header('Date')}")
    print(f"{args.header_name}: {request.get_header(args.header_name)}")
    return 0


def handle_verify_command(args) -> int:
    """Handle verify command."""
    request = SignableRequest(
        method=args.method.upper(),
        path=args.path,
        headers=parse_header_arguments(args.header),
    )
    options = ParseOptions(
        clock_skew=args.clock_skew,
        headers=args.require_headers.split() if args.require_headers else None,
        strict=args.strict,
    )
    parsed = parse_request(request, options)

    if args.secret is not None:
        valid = verify_hmac(parsed, args.secret)
    else:
        valid = verify_signature(parsed, Path(args.key).read_bytes())

    if valid:
        print(f"✓ Signature valid (keyId={parsed.key_id}, algorithm={parsed.algorithm})")
        return 0
    print(f"✗ Signature invalid (keyId={parsed.key_id})")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    try:
        if args.command == 'sign':
            return handle_sign_command(args)
        elif args.command == 'verify':
            return handle_verify_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except (HttpSignatureError, TypeError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
