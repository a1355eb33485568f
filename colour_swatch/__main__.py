"""swatch-tool: Load colour swatch descriptions and cut mask patches.

Usage: uv run swatch-tool <command> <settings.ini> [options]

Commands are auto-discovered from colour_swatch/commands/.
Each command module's docstring is its documentation.
Run `swatch-tool help <command>` for full module docs.
"""

import argparse
import importlib
import sys

from colour_swatch import registry
from colour_swatch.core.errors import SwatchError
from colour_swatch.core.image_source import PillowImageSource
from colour_swatch.core.swatch import SwatchConfig


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'colour_swatch.commands.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  swatch-tool info swatch.ini\n'
        '  swatch-tool check swatch.ini --json\n'
        '  swatch-tool background swatch.ini\n'
        '  swatch-tool segment swatch.ini --out-dir ./patches\n'
        '  swatch-tool help segment\n'
    )
    parser = argparse.ArgumentParser(
        prog='swatch-tool',
        description='Load colour swatch descriptions and cut mask patches.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(name, cmd.help))
        p.add_argument('settings', help='Path to the swatch settings (.ini) file')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument(
            '-o',
            '--out-dir',
            default='.',
            metavar='DIR',
            help='Output directory for patch images (default: cwd)',
        )

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> int:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<12} {_short_doc(name, cmd.help)}')
        print('\nRun: swatch-tool help <command> for full docs.')
        return 0

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        return 1

    doc = (_load_command_module(topic).__doc__ or '').strip()
    print(doc or f'(No module docs for {topic!r})')
    return 0


def run(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == 'help':
        return _print_help(args.topic)

    cmd = registry.get(args.command)
    swatch = SwatchConfig(PillowImageSource())
    try:
        swatch.load_settings(args.settings)
        return cmd.execute(swatch, args)
    except SwatchError as e:
        print(f'swatch-tool: error [{e.kind.value}]: {e}', file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(run())


if __name__ == '__main__':
    main()
