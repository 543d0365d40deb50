"""Main CLI application class for Codex Account Switcher"""

import asyncio
from typing import Optional
from rich.console import Console
from rich.table import Table

from codex_auth import AccountStore, AuthSwitcher
import commands
from cli.status_display import build_accounts_table, build_usage_table


class CodexSwitcherCLI:
    """Command handlers behind the codex-switcher CLI"""

    def __init__(
        self,
        console: Optional[Console] = None,
        store: Optional[AccountStore] = None,
        switcher: Optional[AuthSwitcher] = None,
    ):
        self.console = console or Console()
        self.store = store or AccountStore()
        self.switcher = switcher or AuthSwitcher()

    def list_accounts(self) -> None:
        """Print stored accounts, marking the active one"""
        accounts = commands.list_accounts(self.store)
        if not accounts:
            self.console.print("[yellow]No accounts stored yet.[/yellow] Use 'import' or 'import-current' to add one.")
            return

        active_id = commands.get_active_account_id(self.store)
        self.console.print(build_accounts_table(accounts, active_id))

    def switch(self, id_or_name: str) -> None:
        account = commands.switch_account(id_or_name, store=self.store, switcher=self.switcher)
        self.console.print(f"[green]✓ Switched to '{account.name}'[/green]")
        self.console.print(f"[dim]Wrote {self.switcher.auth_file}[/dim]")

    def import_file(self, path: str, name: str) -> None:
        account = commands.import_account(path, name, store=self.store, switcher=self.switcher)
        self._print_imported(account)

    def import_current(self, name: str) -> None:
        account = commands.import_current_login(name, store=self.store, switcher=self.switcher)
        self._print_imported(account)

    def _print_imported(self, account) -> None:
        self.console.print(f"[green]✓ Imported '{account.name}' ({account.auth_mode})[/green]")
        if account.email:
            self.console.print(f"[dim]Email: {account.email}[/dim]")
        if account.plan_type:
            self.console.print(f"[dim]Plan: {account.plan_type}[/dim]")
        self.console.print(f"[dim]Id: {account.id}[/dim]")

    def remove(self, id_or_name: str) -> None:
        account = commands.remove_account(id_or_name, store=self.store)
        self.console.print(f"[green]✓ Removed '{account.name}'[/green]")

    def rename(self, id_or_name: str, name: str) -> None:
        account = commands.rename_account(id_or_name, name, store=self.store)
        self.console.print(f"[green]✓ Renamed to '{account.name}'[/green]")

    def status(self) -> None:
        """Display the Codex CLI login and the active stored account"""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style="cyan", width=20)
        table.add_column()

        table.add_row("Auth File:", str(self.switcher.auth_file))

        document = self.switcher.read_active_document()
        if document is None or not document.has_credentials():
            table.add_row("Codex Login:", "[red]✗ Not logged in[/red]")
        elif document.openai_api_key is not None:
            table.add_row("Codex Login:", "[green]✓ API key[/green]")
        else:
            table.add_row("Codex Login:", "[green]✓ ChatGPT[/green]")
            if document.last_refresh:
                table.add_row("Last Refresh:", document.last_refresh.isoformat())

        active_id = commands.get_active_account_id(self.store)
        active = self.store.get_account(active_id) if active_id else None
        table.add_row("Active Account:", active.name if active else "[dim]none[/dim]")

        self.console.print(table)

    def usage(self, id_or_name: Optional[str] = None) -> None:
        """Fetch and display usage for one account, or for all of them"""
        accounts = commands.list_accounts(self.store)
        names = {account.id: account.name for account in accounts}

        if id_or_name:
            account = self.store.find_account(id_or_name)
            results = [asyncio.run(commands.get_usage(account.id, store=self.store))]
        else:
            if not accounts:
                self.console.print("[yellow]No accounts stored yet.[/yellow]")
                return
            with self.console.status("Fetching usage..."):
                results = asyncio.run(commands.refresh_all_usage(store=self.store))

        self.console.print(build_usage_table(results, names))
