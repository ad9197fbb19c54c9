"""
Command-line interface for the HTTP Signatures SDK
Signs request descriptions, verifies signed requests and shows how a
signature header is parsed
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .algorithms import DEFAULT_REGISTRY
from .canonical import build_signing_string
from .exceptions import HTTPSignatureError
from .parameters import from_request
from .signer import Signer
from .types import SignableRequest
from .utils import format_http_date
from .verifier import verify_request


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='httpsig',
        description='Sign and verify HTTP requests with HTTP message signatures'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'HTTP Signatures SDK {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    setup_sign_parser(subparsers)
    setup_verify_parser(subparsers)
    setup_inspect_parser(subparsers)

    return parser


def add_request_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments describing the HTTP request."""
    parser.add_argument('--method', '-X', default='GET', help='HTTP method (default: GET)')
    parser.add_argument('--url', required=True, help='Complete request URL')
    parser.add_argument(
        '--header', '-H',
        action='append',
        default=[],
        metavar='NAME: VALUE',
        help='Request header, may be repeated'
    )


def add_key_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('--key', help='Base64 key material')
    group.add_argument('--key-file', type=Path, help='File containing base64 key material')


def setup_sign_parser(subparsers):
    """Setup sign subcommand."""
    sign_parser = subparsers.add_parser('sign', help='Compute the signature header for a request')
    add_request_arguments(sign_parser)
    add_key_arguments(sign_parser)
    sign_parser.add_argument('--key-id', required=True, help='Key identifier')
    sign_parser.add_argument(
        '--algorithm',
        default='hmac-sha256',
        choices=DEFAULT_REGISTRY.names(),
        help='Signature algorithm (default: hmac-sha256)'
    )
    sign_parser.add_argument(
        '--headers',
        default='',
        help='Space separated header names to sign (default: date)'
    )
    sign_parser.add_argument(
        '--authorization',
        action='store_true',
        help='Emit an Authorization header instead of a Signature header'
    )
    sign_parser.add_argument(
        '--add-date',
        action='store_true',
        help='Add a Date header with the current time if missing'
    )


def setup_verify_parser(subparsers):
    """Setup verify subcommand."""
    verify_parser = subparsers.add_parser('verify', help='Verify a signed request')
    add_request_arguments(verify_parser)
    add_key_arguments(verify_parser)
    verify_parser.add_argument(
        '--allow-algorithm',
        action='append',
        dest='allowed_algorithms',
        help='Accepted algorithm, may be repeated (default: all registered)'
    )
    verify_parser.add_argument(
        '--clock-skew',
        type=int,
        default=-1,
        help='Allowed age of the date header in seconds (default: -1, disabled)'
    )
    verify_parser.add_argument(
        '--require',
        action='append',
        default=[],
        metavar='HEADER',
        help='Header the signature must cover, may be repeated'
    )


def setup_inspect_parser(subparsers):
    """Setup inspect subcommand."""
    inspect_parser = subparsers.add_parser('inspect', help='Show parsed signature parameters')
    add_request_arguments(inspect_parser)


def parse_header_arguments(values: List[str]) -> dict:
    headers = {}
    for value in values:
        name, sep, header_value = value.partition(':')
        if not sep or not name.strip():
            raise ValueError(f"Invalid header '{value}', expected 'Name: value'")
        headers[name.strip()] = header_value.strip()
    return headers


def build_request(args) -> SignableRequest:
    return SignableRequest(args.method, args.url, parse_header_arguments(args.header))


def read_key(args) -> str:
    if args.key_file is not None:
        return args.key_file.read_text(encoding='utf-8').strip()
    return args.key


def handle_sign_command(args) -> int:
    request = build_request(args)
    if args.add_date and 'date' not in request.headers:
        request.add_header('Date', format_http_date())
        print(f"Date: {request.headers['date']}")

    signer = Signer(args.algorithm, args.headers.split())
    signature = signer.create_signature_string(request, args.key_id, read_key(args))

    if args.authorization:
        print(f"Authorization: Signature {signature}")
    else:
        print(f"Signature: {signature}")
    return 0


def handle_verify_command(args) -> int:
    request = build_request(args)
    key = read_key(args)
    allowed_algorithms = args.allowed_algorithms or DEFAULT_REGISTRY.names()

    valid = verify_request(
        request,
        lambda key_id: key,
        args.clock_skew,
        allowed_algorithms,
        *args.require
    )

    print(f"Signature verification: {'✓ VERIFIED' if valid else '✗ FAILED'}")
    return 0 if valid else 1


def handle_inspect_command(args) -> int:
    params = from_request(build_request(args))

    print(f"Key ID: {params.key_id}")
    print(f"Algorithm: {params.algorithm_name}")
    print(f"Headers: {' '.join(params.header_list)}")
    print(f"Signature: {params.signature}")
    print("Signing string:")
    print(build_signing_string(params))
    return 0


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

    handlers = {
        'sign': handle_sign_command,
        'verify': handle_verify_command,
        'inspect': handle_inspect_command,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 2

    try:
        return handler(args)
    except HTTPSignatureError as e:
        print(f"Error: {e.message} (code: {e.error_code}, status: {e.http_status})", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
