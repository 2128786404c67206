"""
Controller for account records.

Accounts live in a single Supabase table keyed by ``username``.
"""
import logging
from typing import Any, Dict, Optional

from supabase import Client

from chat_proxy.api.models.account import Account, AccountCreate, AccountDeleted
from chat_proxy.errors import AccountExists, AccountNotFound

logger = logging.getLogger(__name__)


class AccountController:
    """Create, read and delete account documents."""

    def __init__(self, client: Client, table: str = "accounts"):
        self.client = client
        self.table = table

    def _find(self, username: str) -> Optional[Dict[str, Any]]:
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("username", username)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def create_account(self, payload: AccountCreate) -> Account:
        """
        Store a new account.

        Raises:
            AccountExists: If the username is already taken
        """
        if self._find(payload.username) is not None:
            raise AccountExists(f"Account '{payload.username}' already exists")

        record = payload.model_dump()
        response = self.client.table(self.table).insert(record).execute()
        stored = response.data[0] if response.data else record
        logger.info(f"Created account {payload.username}")
        return Account(**stored)

    def get_account(self, username: str) -> Account:
        record = self._find(username)
        if record is None:
            raise AccountNotFound(f"No account found for '{username}'")
        return Account(**record)

    def delete_account(self, username: str) -> AccountDeleted:
        response = self.client.table(self.table).delete().eq("username", username).execute()
        if not response.data:
            raise AccountNotFound(f"No account found for '{username}'")
        logger.info(f"Deleted account {username}")
        return AccountDeleted(username=username)
