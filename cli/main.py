"""CLI entry point and argument parsing"""

import sys
import argparse
from typing import List, Optional
from rich.console import Console

from codex_auth import CodexAuthError
from cli.cli_app import CodexSwitcherCLI
from cli.debug_setup import setup_logging


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage and switch Codex CLI accounts")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List stored accounts")
    subparsers.add_parser("status", help="Show the current Codex login")

    switch = subparsers.add_parser("switch", help="Make a stored account the active Codex login")
    switch.add_argument("account", help="Account id or name")

    import_file = subparsers.add_parser("import", help="Import an auth.json file as a new account")
    import_file.add_argument("path", help="Path to auth.json")
    import_file.add_argument("--name", "-n", required=True, help="Display name for the account")

    import_current = subparsers.add_parser("import-current", help="Import the current Codex login")
    import_current.add_argument("--name", "-n", required=True, help="Display name for the account")

    remove = subparsers.add_parser("remove", help="Delete a stored account")
    remove.add_argument("account", help="Account id or name")

    rename = subparsers.add_parser("rename", help="Rename a stored account")
    rename.add_argument("account", help="Account id or name")
    rename.add_argument("name", help="New display name")

    usage = subparsers.add_parser("usage", help="Show rate limits and credits")
    usage.add_argument("account", nargs="?", default=None, help="Account id or name (default: all)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI"""
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    cli = CodexSwitcherCLI(console=console)

    try:
        if args.command == "list":
            cli.list_accounts()
        elif args.command == "status":
            cli.status()
        elif args.command == "switch":
            cli.switch(args.account)
        elif args.command == "import":
            cli.import_file(args.path, args.name)
        elif args.command == "import-current":
            cli.import_current(args.name)
        elif args.command == "remove":
            cli.remove(args.account)
        elif args.command == "rename":
            cli.rename(args.account, args.name)
        elif args.command == "usage":
            cli.usage(args.account)
    except CodexAuthError as e:
        console.print(f"[red]Error:[/red] {e}")
        if args.debug:
            console.print_exception()
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
