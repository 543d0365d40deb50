"""Status display functionality for CLI"""

import datetime
from typing import Iterable, Mapping, Optional

from rich.table import Table

from codex_auth import StoredAccount
from usage import UsageInfo


def format_percent(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:.0f}%"


def format_window(minutes: Optional[int]) -> str:
    """Render a window length as e.g. '5h' or '7d'"""
    if minutes is None:
        return "-"
    if minutes >= 1440 and minutes % 1440 == 0:
        return f"{minutes // 1440}d"
    if minutes >= 60 and minutes % 60 == 0:
        return f"{minutes // 60}h"
    return f"{minutes}m"


def format_reset(resets_at: Optional[int], now: Optional[datetime.datetime] = None) -> str:
    """Render a reset timestamp relative to now"""
    if resets_at is None:
        return "-"

    now = now or datetime.datetime.now(datetime.timezone.utc)
    try:
        reset_dt = datetime.datetime.fromtimestamp(resets_at, datetime.timezone.utc)
    except (OverflowError, OSError, ValueError):
        return str(resets_at)

    seconds = int((reset_dt - now).total_seconds())
    if seconds <= 0:
        return "now"

    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    if hours >= 24:
        return f"in {hours // 24}d {hours % 24}h"
    if hours > 0:
        return f"in {hours}h {minutes}m"
    return f"in {minutes}m"


def format_credits(usage: UsageInfo) -> str:
    if usage.unlimited_credits:
        return "unlimited"
    if usage.has_credits is None:
        return "-"
    if usage.credits_balance is not None:
        return f"{usage.credits_balance:g}"
    return "yes" if usage.has_credits else "none"


def build_accounts_table(accounts: Iterable[StoredAccount], active_account_id: Optional[str]) -> Table:
    """
    Build the stored accounts table

    Args:
        accounts: Stored accounts
        active_account_id: Id of the account currently written to auth.json

    Returns:
        Rich table ready to print
    """
    table = Table(title="Codex Accounts")
    table.add_column("", width=1)
    table.add_column("Name", style="cyan")
    table.add_column("Mode")
    table.add_column("Email")
    table.add_column("Plan")
    table.add_column("Id", style="dim")

    for account in accounts:
        marker = "[green]*[/green]" if account.id == active_account_id else ""
        table.add_row(
            marker,
            account.name,
            account.auth_mode,
            account.email or "-",
            account.plan_type or "-",
            account.id,
        )

    return table


def build_usage_table(results: Iterable[UsageInfo], names: Mapping[str, str]) -> Table:
    """
    Build the usage table

    Args:
        results: Usage records
        names: Account id to display name

    Returns:
        Rich table ready to print
    """
    table = Table(title="Codex Usage")
    table.add_column("Account", style="cyan")
    table.add_column("Plan")
    table.add_column("Primary")
    table.add_column("Resets")
    table.add_column("Secondary")
    table.add_column("Resets")
    table.add_column("Credits")

    for usage in results:
        name = names.get(usage.account_id, usage.account_id)
        if usage.error:
            table.add_row(name, usage.plan_type or "-", f"[red]{usage.error}[/red]", "", "", "", "")
            continue

        table.add_row(
            name,
            usage.plan_type or "-",
            f"{format_percent(usage.primary_used_percent)} / {format_window(usage.primary_window_minutes)}",
            format_reset(usage.primary_resets_at),
            f"{format_percent(usage.secondary_used_percent)} / {format_window(usage.secondary_window_minutes)}",
            format_reset(usage.secondary_resets_at),
            format_credits(usage),
        )

    return table
