"""
Contacts Account Manager

Manages named contacts accounts, their stores and query layers.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type
import logging

from contactdeck.config import ACCOUNTS_FILE
from .errors import AccountError, ContactsError
from .interface import (
    AuthorizationStatus, Configuration, ContactsAccount, ContactStore,
    FetchResults, GroupedFetchResults, SortOrder
)
from .query import Contacts

logger = logging.getLogger(__name__)


class ContactsManager:
    """Manages contacts accounts and query layer instances."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or ACCOUNTS_FILE
        self.accounts: Dict[str, ContactsAccount] = {}
        self.contacts: Dict[str, Contacts] = {}
        self.adapter_classes: Dict[str, Type[ContactStore]] = {}

        self._load_accounts()

    def register_adapter_type(self, adapter_type: str, adapter_class: Type[ContactStore]) -> None:
        """Register a store implementation."""
        self.adapter_classes[adapter_type] = adapter_class
        logger.info(f"✅ Registered contacts adapter: {adapter_type}")

    def _load_accounts(self) -> None:
        """Load accounts from config file."""
        if not self.config_path.exists():
            logger.info("No contacts accounts config found, starting fresh")
            return

        try:
            config = json.loads(self.config_path.read_text())
        except (OSError, ValueError) as e:
            logger.error(f"❌ Failed to load accounts: {e}")
            return

        for name, data in config.get("accounts", {}).items():
            self.accounts[name] = ContactsAccount(
                name=name,
                adapter=data.get("adapter", ""),
                credentials_ref=data.get("credentials_ref", ""),
                config=data.get("config", {})
            )
        logger.info(f"✅ Loaded {len(self.accounts)} contacts accounts")

    def _save_accounts(self) -> None:
        """Save accounts to config file."""
        config = {"accounts": {}}
        for name, account in self.accounts.items():
            config["accounts"][name] = {
                "adapter": account.adapter,
                "credentials_ref": account.credentials_ref,
                "config": account.config
            }

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(config, indent=2))

    def add_account(
        self,
        name: str,
        adapter: str,
        credentials_ref: str = "",
        config: Optional[Dict[str, Any]] = None
    ) -> ContactsAccount:
        """Add a new contacts account."""
        if name in self.accounts:
            raise AccountError(f"Account '{name}' already exists")

        if adapter not in self.adapter_classes:
            available = ", ".join(self.adapter_classes.keys()) or "none"
            raise AccountError(f"Unknown adapter '{adapter}'. Available: {available}")

        account = ContactsAccount(
            name=name,
            adapter=adapter,
            credentials_ref=credentials_ref,
            config=config or {}
        )
        self.accounts[name] = account
        self._save_accounts()
        logger.info(f"✅ Added contacts account: {name} ({adapter})")
        return account

    def remove_account(self, name: str) -> None:
        """Remove a contacts account."""
        if name not in self.accounts:
            raise AccountError(f"Account '{name}' not found")

        self.contacts.pop(name, None)
        del self.accounts[name]
        self._save_accounts()

    def list_accounts(self) -> str:
        """List all configured accounts."""
        if not self.accounts:
            return "👤 No contacts accounts configured"

        lines = ["👤 Contacts Accounts", "─" * 40]
        for name, account in self.accounts.items():
            connected = "🟢" if name in self.contacts else "⚪"
            lines.append(f"{connected} {name} ({account.adapter})")

        return "\n".join(lines)

    @staticmethod
    def configuration_for(account: ContactsAccount) -> Configuration:
        """Inclusion configuration from the account's exclude_ids list."""
        exclude_ids = account.config.get("exclude_ids") or []
        if isinstance(exclude_ids, str):
            exclude_ids = [exclude_ids]
        return Configuration(exclude_ids=frozenset(exclude_ids))

    def get_contacts(self, account_name: str) -> Contacts:
        """Get or create the query layer for an account."""
        if account_name in self.contacts:
            return self.contacts[account_name]

        if account_name not in self.accounts:
            raise AccountError(f"Account not found: {account_name}")

        account = self.accounts[account_name]
        if account.adapter not in self.adapter_classes:
            raise AccountError(f"Adapter not registered: {account.adapter}")

        store = self.adapter_classes[account.adapter](account=account)
        contacts = Contacts(store, self.configuration_for(account))
        self.contacts[account_name] = contacts
        return contacts

    # Convenience methods

    async def request_access(self, account_name: str) -> Tuple[bool, Optional[ContactsError]]:
        return await self.get_contacts(account_name).request_access()

    async def authorization_status(self, account_name: str) -> AuthorizationStatus:
        return await self.get_contacts(account_name).authorization_status()

    async def fetch_contacts(
        self,
        account_name: str,
        sort_order: SortOrder = SortOrder.NONE
    ) -> FetchResults:
        return await self.get_contacts(account_name).fetch_contacts(sort_order)

    async def fetch_grouped(self, account_name: str) -> GroupedFetchResults:
        return await self.get_contacts(account_name).fetch_contacts_grouped_by_alphabet()

    async def search(self, account_name: str, query: str) -> FetchResults:
        return await self.get_contacts(account_name).search_contact(query)
