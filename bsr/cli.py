#!/usr/bin/env python3
"""BSR CLI entrypoint."""

import sys
import argparse
import logging
from pathlib import Path

from bsr.lib.config import BSRConfig, ConfigError, load_config
from bsr.lib.validate import SchemaValidationError
from bsr.commands import convert as cmd_convert_module
from bsr.commands import check as cmd_check_module
from bsr.commands import spec as cmd_spec_module
from bsr.commands import config as cmd_config_module
from bsr.commands import status as cmd_status_module

VERSION = "0.1.0"


def get_root(args) -> Path:
    """Get the project root (directory holding .bsr/)."""
    return Path(args.dir).resolve() if args.dir else Path.cwd()


def get_config(root: Path) -> BSRConfig:
    """Load .bsr/config.yaml or exit."""
    try:
        return load_config(root)
    except ConfigError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    except SchemaValidationError as e:
        print("ERROR: Schema validation failed while loading .bsr/config.yaml", file=sys.stderr)
        print(f"  Error: {e}", file=sys.stderr)
        sys.exit(2)


def cmd_convert(args):
    return cmd_convert_module.cmd_convert(args, get_root(args))


def cmd_check(args):
    return cmd_check_module.cmd_check(args, get_root(args))


def cmd_spec(args):
    return cmd_spec_module.cmd_spec(args, get_root(args))


def cmd_config(args):
    return cmd_config_module.cmd_config(args, get_root(args))


def cmd_status(args):
    root = get_root(args)
    return cmd_status_module.cmd_status(args, root, get_config(root))


def add_validation_args(parser):
    parser.add_argument('--strict', action='store_true', help='Treat warnings as errors')
    parser.add_argument('--require-personas', action='store_true', help='Fail without personas')
    parser.add_argument('--require-milestones', action='store_true', help='Fail without milestones')
    parser.add_argument('--require-architecture', action='store_true', help='Fail without architecture')
    parser.add_argument('--min-features', type=int, default=1, help='Minimum number of features')
    parser.add_argument('--min-goals', type=int, default=1, help='Minimum number of goals')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bsr',
        description='BSR Method - BMAD planning, SpecKit specs, Ralph execution',
    )
    parser.add_argument('--version', '-V', action='version', version=f'bsr {VERSION}')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output')
    parser.add_argument('--dir', '-C', help='Project root (default: current directory)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # bsr convert
    p_convert = subparsers.add_parser('convert', help='Convert BMAD output to docs/idea.yaml')
    p_convert.add_argument('source', help='BMAD directory or single project file')
    p_convert.add_argument('--output', '-o', help='Output path (default: docs/idea.yaml)')
    p_convert.add_argument('--version', dest='idea_version', help='Idea version (default: 0.1.0)')
    p_convert.add_argument('--personas', action='store_true', help='Include personas')
    p_convert.set_defaults(func=cmd_convert)

    # bsr check
    p_check = subparsers.add_parser('check', help='Validate an idea document')
    p_check.add_argument('idea', nargs='?', default='docs/idea.yaml', help='Idea file (default: docs/idea.yaml)')
    add_validation_args(p_check)
    p_check.set_defaults(func=cmd_check)

    # bsr spec
    p_spec = subparsers.add_parser('spec', help='Generate specification from idea document')
    p_spec.add_argument('idea', nargs='?', default='docs/idea.yaml', help='Idea file (default: docs/idea.yaml)')
    p_spec.add_argument('--output', '-o', help='Output path (default: specs/spec.md or specs/spec.yaml)')
    p_spec.add_argument('--format', '-f', choices=['markdown', 'yaml'], default='markdown')
    p_spec.add_argument('--tasks', action='store_true', help='Include task breakdown section')
    p_spec.add_argument('--acceptance', action='store_true', help='Include acceptance criteria placeholders')
    add_validation_args(p_spec)
    p_spec.set_defaults(func=cmd_spec)

    # bsr config
    p_config = subparsers.add_parser('config', help='View BSR configuration')
    p_config.add_argument('--get', '-g', help='Get a value (dot notation, e.g. project.name)')
    p_config.set_defaults(func=cmd_config)

    # bsr status
    p_status = subparsers.add_parser('status', help='Show current BSR project status')
    p_status.add_argument('--json', '-j', action='store_true', help='Output as JSON')
    p_status.set_defaults(func=cmd_status)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
