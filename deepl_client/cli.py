"""Command line access to the DeepL API (usage, translate, diagnose).

Examples:
  deepl-cli usage
  deepl-cli translate "Hello, world!" --target-lang JA --source-lang EN
  deepl-cli --api-type pro usage --json
  deepl-cli diagnose --connect
  deepl-cli --mock translate "hello" --target-lang DE

Options:
  --env-file path (default .env, loaded without overriding non-empty variables)
  --mock (answer from the offline mock provider)
  --verbose
"""
from __future__ import annotations
import argparse
import json
import logging
import os
import sys
import textwrap
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from . import credentials
from .api_type import ApiType
from .client import DeepLClient
from .credentials import mask
from .envfile import load_env_file
from .exceptions import (
    AuthorizationFailedError,
    DeepLClientError,
    DeepLError,
    NotFoundError,
    QuotaExceededError,
    UnauthorizedError,
)
from .mock_provider import MockSession, seed_mock

logger = logging.getLogger(__name__)

CONFIG_VARS = ['DEEPL_API_TYPE', 'DEEPL_BASE_URL', 'DEEPL_TIMEOUT']

HINTS = {
    UnauthorizedError: 'HINT 401: The key was rejected. Check for typos or a revoked key.',
    AuthorizationFailedError: 'HINT 403: Free keys (ending in ":fx") only work with --api-type free, pro keys with --api-type pro.',
    NotFoundError: 'HINT 404: Check --base-url / DEEPL_BASE_URL; the API lives under /v2.',
    QuotaExceededError: 'HINT 456: The monthly character limit is used up. Wait for the next billing period or upgrade.',
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog='deepl-cli', description='Query the DeepL translation API')
    p.add_argument('--api-type', choices=[t.value for t in ApiType], help='Endpoint (default: DEEPL_API_TYPE or free)')
    p.add_argument('--base-url', help='Override the endpoint base URL (default: DEEPL_BASE_URL)')
    p.add_argument('--timeout', type=float, help='Transport timeout in seconds (default: none)')
    p.add_argument('--env-file', default='.env', help='Environment file to load')
    p.add_argument('--mock', action='store_true', help='Use the offline mock provider')
    p.add_argument('--seed', type=int, help='Seed for the mock provider')
    p.add_argument('--verbose', action='store_true')
    sub = p.add_subparsers(dest='command', required=True)

    usage = sub.add_parser('usage', help='Show the character usage of the account')
    usage.add_argument('--json', action='store_true', help='Print raw JSON')

    trans = sub.add_parser('translate', help='Translate a text')
    trans.add_argument('text')
    trans.add_argument('--target-lang', required=True)
    trans.add_argument('--source-lang', default='', help='Leave empty to let the API detect it')
    trans.add_argument('--json', action='store_true', help='Print raw JSON')

    diag = sub.add_parser('diagnose', help='Check configuration variables (and optionally connectivity)')
    diag.add_argument('--connect', action='store_true', help='Also perform a usage request')
    return p.parse_args(argv)


def build_client(args: argparse.Namespace) -> DeepLClient:
    kwargs = {}
    if args.base_url:
        kwargs['base_url'] = args.base_url
    if args.timeout is not None:
        kwargs['timeout'] = args.timeout
    if args.mock:
        seed_mock(args.seed)
        kwargs['session'] = MockSession()
    api_type = ApiType.from_name(args.api_type) if args.api_type else None
    return DeepLClient.from_env(api_type, **kwargs)


def cmd_usage(client: DeepLClient, args: argparse.Namespace) -> None:
    status = client.get_account_status()
    if args.json:
        print(json.dumps(asdict(status), indent=2))
        return
    pct = (status.character_count / status.character_limit * 100) if status.character_limit else 0.0
    print(f"Characters used : {status.character_count}")
    print(f"Character limit : {status.character_limit}")
    print(f"Remaining       : {status.remaining} ({pct:.1f}% used)")


def cmd_translate(client: DeepLClient, args: argparse.Namespace) -> None:
    result = client.translate_sentence(args.text, args.source_lang, args.target_lang)
    if args.json:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
        return
    for t in result.translations:
        print(f"[{t.detected_source_language or '?'}] {t.text}")


def print_report() -> None:
    names = [credentials.NAME_ENV_KEY_API] + CONFIG_VARS
    widest = max(len(k) for k in names)
    print('\n[VARIABLE PRESENCE]')
    for k in names:
        raw = os.getenv(k)
        if raw is None:
            status = 'MISSING'
        elif raw == '' or (k != credentials.NAME_ENV_KEY_API and raw.strip() == ''):
            status = 'EMPTY'
        else:
            status = 'OK'
        shown = mask(raw) if k == credentials.NAME_ENV_KEY_API else raw
        print(f"  {k.ljust(widest)} : {status:<8} {'' if status != 'OK' else shown}")
    print()


def cmd_diagnose(client: DeepLClient, args: argparse.Namespace) -> None:
    print_report()
    print(f"[endpoint] {client.BASE_URL or '(empty: set DEEPL_BASE_URL for the custom API type)'}")
    if not args.connect:
        return
    try:
        status = client.get_account_status()
    except DeepLClientError as e:
        print(f"[connect] ERROR ({e.stage.value}): {e}")
        hint = HINTS.get(type(e.cause))  # type: ignore[arg-type]
        if hint:
            print(textwrap.indent(hint, '  '))
        raise
    print(f"[connect] OK: {status.character_count}/{status.character_limit} characters used")


COMMANDS = {
    'usage': cmd_usage,
    'translate': cmd_translate,
    'diagnose': cmd_diagnose,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='[%(levelname)s] %(message)s')
    loaded = load_env_file(Path(args.env_file))
    if loaded:
        logger.debug('Loaded %s from %s', ', '.join(loaded), args.env_file)
    try:
        client = build_client(args)
        COMMANDS[args.command](client, args)
    except (DeepLError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
