"""
Command-line interface for Pusher REST Python SDK
Signs requests and publishes events from the shell
"""

import argparse
import json
import logging
import os
import sys
from typing import Dict, List, Optional

from . import __version__
from .client import Pusher
from .config import ENV_APP_ID, ENV_KEY, ENV_SECRET, ClientConfig
from .exceptions import InvalidArgument, PusherSDKError
from .signing.request_signer import RequestSigner
from .signing.types import HttpMethod


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='pusher-cli',
        description='Pusher REST API command-line interface for signing requests and triggering events'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Pusher REST Python SDK {__version__}'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_sign_parser(subparsers)
    setup_trigger_parser(subparsers)

    return parser


def add_connection_arguments(parser: argparse.ArgumentParser) -> None:
    """Add credential and connection options shared by all commands."""
    parser.add_argument('--app-id', help=f'Application ID (default: ${ENV_APP_ID})')
    parser.add_argument('--key', help=f'Application key (default: ${ENV_KEY})')
    parser.add_argument('--secret', help=f'Application secret (default: ${ENV_SECRET})')
    parser.add_argument('--host', help='API host (default: $PUSHER_HOST or api.pusherapp.com)')
    parser.add_argument('--secure', action='store_true', help='Use https')
    parser.add_argument('--timeout-ms', type=int, help='Request timeout in milliseconds')


def setup_sign_parser(subparsers):
    """Setup request signing subcommand."""
    sign_parser = subparsers.add_parser('sign', help='Print the signed URI for a request')
    add_connection_arguments(sign_parser)
    sign_parser.add_argument(
        '--method',
        choices=[m.value for m in HttpMethod],
        default='POST',
        help='HTTP method (default: POST)'
    )
    sign_parser.add_argument('--path', required=True, help='API path, e.g. /apps/3/events')
    sign_parser.add_argument('--body', help='Request body to sign')
    sign_parser.add_argument(
        '--param',
        action='append',
        default=[],
        metavar='NAME=VALUE',
        help='Extra query parameter (repeatable)'
    )
    sign_parser.add_argument('--timestamp', type=int, help='Fixed auth_timestamp')
    sign_parser.add_argument('--json', action='store_true', help='Output as JSON')


def setup_trigger_parser(subparsers):
    """Setup event trigger subcommand."""
    trigger_parser = subparsers.add_parser('trigger', help='Publish an event')
    add_connection_arguments(trigger_parser)
    trigger_parser.add_argument(
        '--channel',
        action='append',
        required=True,
        help='Channel to publish to (repeatable, up to 10)'
    )
    trigger_parser.add_argument('--event', required=True, help='Event name')
    trigger_parser.add_argument('--data', required=True, help='Event data as JSON')
    trigger_parser.add_argument('--socket-id', help='Socket ID to exclude')


def parse_params(pairs: List[str]) -> Dict[str, str]:
    """Parse NAME=VALUE pairs into a dictionary."""
    params = {}
    for pair in pairs:
        name, sep, value = pair.partition('=')
        if not sep or not name:
            raise InvalidArgument(f"Query parameter must be NAME=VALUE, got {pair!r}")
        params[name] = value
    return params


def build_config(args) -> ClientConfig:
    """Build connection settings from the environment and command-line overrides."""
    config = ClientConfig.from_env()

    changes = {}
    if args.host:
        changes['host'] = args.host
    if args.timeout_ms is not None:
        changes['request_timeout_ms'] = args.timeout_ms
    if changes:
        config = config.with_changes(**changes)

    if args.secure:
        config = config.with_secure(True)

    return config


def resolve_credential(value: Optional[str], env_name: str, flag: str) -> str:
    """Return the flag value, falling back to an environment variable."""
    resolved = value or os.environ.get(env_name)
    if not resolved:
        raise InvalidArgument(f"{flag} is required (or set ${env_name})")
    return resolved


def handle_sign_command(args) -> int:
    """Handle request signing command."""
    config = build_config(args)
    key = resolve_credential(args.key, ENV_KEY, '--key')
    secret = resolve_credential(args.secret, ENV_SECRET, '--secret')

    signer = RequestSigner(key, secret, config.scheme, config.host)
    signed = signer.sign(
        args.method,
        args.path,
        body=args.body,
        extra_query_params=parse_params(args.param),
        timestamp=args.timestamp
    )

    if args.json:
        print(json.dumps({
            'uri': signed.uri,
            'canonical_string': signed.canonical_string,
            'signature': signed.signature,
            'query_params': signed.query_params,
        }, indent=2))
    else:
        print("Canonical string:")
        print(signed.canonical_string)
        print()
        print(f"Signature: {signed.signature}")
        print(f"URI: {signed.uri}")

    return 0


def handle_trigger_command(args) -> int:
    """Handle event trigger command."""
    config = build_config(args)
    app_id = resolve_credential(args.app_id, ENV_APP_ID, '--app-id')
    key = resolve_credential(args.key, ENV_KEY, '--key')
    secret = resolve_credential(args.secret, ENV_SECRET, '--secret')

    try:
        data = json.loads(args.data)
    except json.JSONDecodeError as e:
        raise InvalidArgument(f"--data must be valid JSON: {e}")

    with Pusher(app_id, key, secret, config=config) as pusher:
        result = pusher.trigger(args.channel, args.event, data, socket_id=args.socket_id)

    if result.is_success:
        print(f"✓ Event '{args.event}' triggered on {', '.join(args.channel)}")
        return 0

    if hasattr(result, 'status_code'):
        print(f"✗ {result.status.value}: HTTP {result.status_code}", file=sys.stderr)
        if result.body:
            print(f"  {result.body}", file=sys.stderr)
    else:
        print(f"✗ {result.status.value}: {result.message}", file=sys.stderr)
    return 1


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        if args.command == 'sign':
            return handle_sign_command(args)
        elif args.command == 'trigger':
            return handle_trigger_command(args)
        else:
            # No command specified, show help
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except InvalidArgument as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except PusherSDKError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
