"""
Tests for ContactsManager account handling and routing.
"""
import json

import pytest

from contactdeck.services.contacts import AccountError, AuthorizationStatus, ContactsManager
from contactdeck.services.contacts.adapters import ADAPTERS
from contactdeck.services.contacts.adapters.memory import MemoryContactStore


@pytest.fixture
def book_file(tmp_path):
    path = tmp_path / "book.json"
    path.write_text(json.dumps({"contacts": [
        {"id": "id-1", "given": "Ann", "phones": [{"number": "555-0100", "type": "mobile"}]},
        {"id": "id-2", "given": "Zoe"},
        {"id": "id-3", "given": "ann"},
    ]}))
    return path


@pytest.fixture
def manager(tmp_path):
    manager = ContactsManager(config_path=tmp_path / "config" / "contacts_accounts.json")
    for adapter_type, adapter_class in ADAPTERS.items():
        manager.register_adapter_type(adapter_type, adapter_class)
    return manager


class TestAccounts:

    def test_starts_empty_without_config(self, manager):
        assert manager.accounts == {}
        assert "No contacts accounts" in manager.list_accounts()

    def test_add_persists(self, manager, book_file):
        manager.add_account("home", "memory", config={"path": str(book_file)})

        saved = json.loads(manager.config_path.read_text())
        assert saved["accounts"]["home"]["adapter"] == "memory"

        reloaded = ContactsManager(config_path=manager.config_path)
        assert reloaded.accounts["home"].config["path"] == str(book_file)

    def test_duplicate_and_unknown_adapter(self, manager):
        manager.add_account("home", "memory")
        with pytest.raises(AccountError):
            manager.add_account("home", "memory")
        with pytest.raises(AccountError):
            manager.add_account("work", "carddav")

    def test_remove(self, manager):
        manager.add_account("home", "memory")
        manager.remove_account("home")
        assert "home" not in manager.accounts
        with pytest.raises(AccountError):
            manager.remove_account("home")

    def test_malformed_config_is_ignored(self, tmp_path):
        path = tmp_path / "contacts_accounts.json"
        path.write_text("{not json")
        assert ContactsManager(config_path=path).accounts == {}

    def test_unknown_account(self, manager):
        with pytest.raises(AccountError):
            manager.get_contacts("nope")


class TestRouting:

    def test_query_layer_is_cached(self, manager, book_file):
        manager.add_account("home", "memory", config={"path": str(book_file)})
        first = manager.get_contacts("home")
        assert manager.get_contacts("home") is first
        assert isinstance(first.store, MemoryContactStore)
        assert "🟢 home (memory)" in manager.list_accounts()

    @pytest.mark.asyncio
    async def test_exclude_ids_from_account_config(self, manager, book_file):
        manager.add_account("home", "memory", config={"path": str(book_file), "exclude_ids": ["id-2"]})

        results = await manager.fetch_contacts("home")
        assert [c.id for c in results.contacts] == ["id-1", "id-3"]
        assert results.contacts[0].primary_phone == "555-0100"

        grouped = await manager.fetch_grouped("home")
        assert [c.id for c in grouped.groups["A"]] == ["id-1", "id-3"]

        found = await manager.search("home", "zoe")
        assert found.contacts == []

    @pytest.mark.asyncio
    async def test_access_status_from_account_config(self, manager):
        manager.add_account("home", "memory", config={"status": "not_determined"})
        assert await manager.authorization_status("home") == AuthorizationStatus.NOT_DETERMINED
        assert await manager.request_access("home") == (True, None)
        assert await manager.authorization_status("home") == AuthorizationStatus.AUTHORIZED

    @pytest.mark.asyncio
    async def test_single_excluded_id_string(self, manager, book_file):
        manager.add_account("home", "memory", config={"path": str(book_file), "exclude_ids": "id-2"})
        results = await manager.fetch_contacts("home")
        assert [c.id for c in results.contacts] == ["id-1", "id-3"]


class TestMemoryStoreFile:

    def test_from_json_file(self, book_file):
        store = MemoryContactStore.from_json_file(book_file, status=AuthorizationStatus.DENIED)
        assert [c.id for c in store.contacts] == ["id-1", "id-2", "id-3"]
        assert store.authorization_status() == AuthorizationStatus.DENIED
        assert store.default_container_identifier() == "memory"
