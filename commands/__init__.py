"""Operations exposed to front ends (CLI, desktop shells)"""

from .usage import get_usage, refresh_all_usage
from .accounts import (
    list_accounts,
    get_active_account_id,
    switch_account,
    import_account,
    import_current_login,
    remove_account,
    rename_account,
)

__all__ = [
    "get_usage",
    "refresh_all_usage",
    "list_accounts",
    "get_active_account_id",
    "switch_account",
    "import_account",
    "import_current_login",
    "remove_account",
    "rename_account",
]
