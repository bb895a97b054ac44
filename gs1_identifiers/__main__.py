"""
CLI interface for the GS1 Identifier Toolkit.

Usage:
    python -m gs1_identifiers <command> <value> [options]

Commands:
    validate     Validate an EPC URN or Digital Link URI
    to-urn       Convert a Digital Link / WebURI to its URN form
    to-dl        Convert a URN to its Digital Link / WebURI form
    bare         Strip vocabulary prefixes
    cbv          Expand a bare vocabulary value for an EPCIS field
    normalize    Rewrite Digital Link shortcodes to AI codes
    parse        Extract AI/value pairs from a Digital Link URI
    gcp          Look up the GCP length of a key or Digital Link URI
"""

import argparse
import json
import logging
import sys
from typing import Any, Optional

from .core import (
    get_gcp_length_resolver,
    normalize,
    parse,
    to_bare_string,
    to_cbv_vocabulary,
    to_digital_link,
    to_urn,
    to_urn_map,
)
from .exceptions import ValidationError
from .validators import ValidationContext, check_identifier, validate_digital_link


def _validate(args: argparse.Namespace) -> Any:
    context = ValidationContext(
        epcis_compliant=not args.all_keys,
        validate_check_digit=not args.no_check_digit,
        gcp_length=args.gcp_length,
    )
    if "://" in args.value and args.gcp_length is None:
        # Digital Link without an explicit GCP length: look it up
        return {"identifier": validate_digital_link(args.value, context), "status": "valid"}

    outcome = check_identifier(args.value, context)
    if not outcome.valid:
        raise ValidationError(outcome.reason or f"Identifier not recognized: {args.value}", args.value)
    return {"identifier": args.value, "status": outcome.status.value, "validator": outcome.validator}


def _to_urn(args: argparse.Namespace) -> Any:
    if args.full:
        return to_urn_map(args.value, args.gcp_length)
    return to_urn(args.value, args.gcp_length)


def _gcp(args: argparse.Namespace) -> Any:
    resolver = get_gcp_length_resolver()
    if "://" in args.value:
        return resolver.resolve_uri(args.value)
    return resolver.resolve(args.value, args.ai_prefix)


COMMANDS = {
    "validate": _validate,
    "to-urn": _to_urn,
    "to-dl": lambda args: to_digital_link(args.value),
    "bare": lambda args: to_bare_string(args.value),
    "cbv": lambda args: to_cbv_vocabulary(args.value, args.field, args.format),
    "normalize": lambda args: normalize(args.value),
    "parse": lambda args: parse(args.value, include_meta=args.meta),
    "gcp": _gcp,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gs1_identifiers',
        description='Convert and validate GS1 identifiers'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Output result as JSON'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    sub = parser.add_subparsers(dest='command', required=True)

    validate = sub.add_parser('validate', help='Validate an EPC URN or Digital Link URI')
    validate.add_argument('value')
    validate.add_argument('--gcp-length', type=int, default=None,
                          help='GCP length of a Digital Link key (looked up when omitted)')
    validate.add_argument('--all-keys', action='store_true',
                          help='Also accept Digital-Link-only GTIN URIs (weight, expiry, CPV)')
    validate.add_argument('--no-check-digit', action='store_true',
                          help='Skip check digit verification')

    urn = sub.add_parser('to-urn', help='Convert to URN form')
    urn.add_argument('value')
    urn.add_argument('--gcp-length', type=int, default=None)
    urn.add_argument('--full', action='store_true',
                     help='Print the full conversion record of a Digital Link URI')

    dl = sub.add_parser('to-dl', help='Convert to Digital Link / WebURI form')
    dl.add_argument('value')

    bare = sub.add_parser('bare', help='Strip vocabulary prefixes')
    bare.add_argument('value')

    cbv = sub.add_parser('cbv', help='Expand a bare vocabulary value')
    cbv.add_argument('value')
    cbv.add_argument('--field', required=True, help='EPCIS field name, e.g. bizStep')
    cbv.add_argument('--format', default='urn', help="'urn' or 'webUri'")

    norm = sub.add_parser('normalize', help='Rewrite shortcodes to AI codes')
    norm.add_argument('value')

    parse_cmd = sub.add_parser('parse', help='Extract AI/value pairs')
    parse_cmd.add_argument('value')
    parse_cmd.add_argument('--meta', action='store_true', help='Include protocol, domain and port')

    gcp = sub.add_parser('gcp', help='Look up the GCP length')
    gcp.add_argument('value')
    gcp.add_argument('--ai-prefix', default='', help="AI prefix of a bare key, e.g. '/01/'")

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = COMMANDS[args.command](args)
    except ValidationError as e:
        if args.json:
            print(json.dumps({"error": e.message, "input": args.value}, ensure_ascii=False, indent=2))
        else:
            print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({"input": args.value, "result": result}, ensure_ascii=False, indent=2))
    elif isinstance(result, dict):
        for key, value in result.items():
            print(f"{key}: {value}")
    else:
        print(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
