"""
contactdeck MCP Server

Tools for:
- Contacts: access, fetch, grouped fetch, search
- Telephony: call/SMS capability checks, call placement
"""

import logging
from typing import Any, Dict, List, Optional

from fastmcp import FastMCP

from contactdeck import config
from contactdeck.services.contacts import (
    AccountError, Contact, ContactsManager, FetchResults, GroupedFetchResults, SortOrder
)
from contactdeck.services.contacts.adapters import ADAPTERS
from contactdeck.services.contacts.filtering import CATCH_ALL_KEY
from contactdeck.services.telephony import Telephone
from contactdeck.services.telephony.adapters import SystemTelephony

logger = logging.getLogger(__name__)

mcp = FastMCP("contactdeck")

contacts_manager = ContactsManager()
for adapter_type, adapter_class in ADAPTERS.items():
    contacts_manager.register_adapter_type(adapter_type, adapter_class)

telephone = Telephone(SystemTelephony())

# =============================================================================
# FORMATTING
# =============================================================================

def format_contact(contact: Contact) -> str:
    line = f"• {contact.display_name}"
    if contact.primary_phone:
        line += f" | 📞 {contact.primary_phone}"
    if contact.primary_email:
        line += f" | ✉️ {contact.primary_email}"
    return f"{line} (ID: {contact.id})"


def format_results(results: FetchResults, title: str) -> str:
    if not results.ok:
        return f"❌ {title} failed: {results.error}"
    if not results.contacts:
        return f"👤 {title}: no contacts"

    lines = [f"👤 {title} ({len(results.contacts)})", "─" * 40]
    lines.extend(format_contact(c) for c in results.contacts)
    return "\n".join(lines)


def format_groups(results: GroupedFetchResults) -> str:
    if not results.ok:
        return f"❌ Grouped fetch failed: {results.error}"
    if not results.groups:
        return "👤 No contacts"

    # Letters first, catch-all bucket last
    keys = sorted(k for k in results.groups if k != CATCH_ALL_KEY)
    if CATCH_ALL_KEY in results.groups:
        keys.append(CATCH_ALL_KEY)

    lines = []
    for key in keys:
        lines.append(f"── {key} ──")
        lines.extend(format_contact(c) for c in results.groups[key])
    return "\n".join(lines)

# =============================================================================
# HEALTH
# =============================================================================

@mcp.tool()
def ping() -> str:
    """Health check. Returns pong if the server is running."""
    return "pong from contactdeck"

# =============================================================================
# ACCOUNTS
# =============================================================================

@mcp.tool()
def contacts_accounts() -> str:
    """List configured contacts accounts."""
    return contacts_manager.list_accounts()


@mcp.tool()
def contacts_add_account(
    name: str,
    adapter: str,
    exclude_ids: Optional[List[str]] = None,
    settings: Optional[Dict[str, Any]] = None
) -> str:
    """
    Add a contacts account.

    Args:
        name: Account name
        adapter: Adapter type ("gcontacts" or "memory")
        exclude_ids: Contact IDs never returned by queries on this account
        settings: Adapter config (e.g. token_path, path)
    """
    account_config = dict(settings or {})
    if exclude_ids:
        account_config["exclude_ids"] = list(exclude_ids)
    try:
        contacts_manager.add_account(name, adapter, config=account_config)
    except AccountError as e:
        return f"❌ {e}"
    return f"✅ Added contacts account: {name} ({adapter})"

# =============================================================================
# CONTACTS
# =============================================================================

@mcp.tool()
async def contacts_request_access(account: str = "default") -> str:
    """Request access to an account's contacts."""
    try:
        granted, error = await contacts_manager.request_access(account)
    except AccountError as e:
        return f"❌ {e}"
    if error:
        return f"❌ Access request failed: {error}"
    return "✅ Access granted" if granted else "❌ Access not granted"


@mcp.tool()
async def contacts_status(account: str = "default") -> str:
    """Current authorization status for an account's contacts."""
    try:
        status = await contacts_manager.authorization_status(account)
    except AccountError as e:
        return f"❌ {e}"
    return f"🔐 {account}: {status.value}"


@mcp.tool()
async def contacts_fetch(account: str = "default", sort_order: str = "none") -> str:
    """
    Fetch all contacts.

    Args:
        account: Contacts account name
        sort_order: none, user_default, given_name or family_name
    """
    try:
        order = SortOrder(sort_order)
    except ValueError:
        valid = ", ".join(o.value for o in SortOrder)
        return f"❌ Unknown sort order '{sort_order}'. Use one of: {valid}"
    try:
        results = await contacts_manager.fetch_contacts(account, order)
    except AccountError as e:
        return f"❌ {e}"
    return format_results(results, "Contacts")


@mcp.tool()
async def contacts_grouped(account: str = "default") -> str:
    """Fetch contacts grouped by the first letter of the given name."""
    try:
        results = await contacts_manager.fetch_grouped(account)
    except AccountError as e:
        return f"❌ {e}"
    return format_groups(results)


@mcp.tool()
async def contacts_search(query: str = "", account: str = "default") -> str:
    """
    Search contacts by name. An empty query lists the default container.

    Args:
        query: Name to search for
        account: Contacts account name
    """
    try:
        results = await contacts_manager.search(account, query)
    except AccountError as e:
        return f"❌ {e}"
    return format_results(results, f"Search '{query}'" if query else "All contacts")

# =============================================================================
# TELEPHONY
# =============================================================================

@mcp.tool()
def phone_can_call() -> str:
    """Check if this host can place phone calls."""
    if telephone.is_capable_to_call():
        return "✅ Phone calls available"
    return "❌ Phone calls unavailable"


@mcp.tool()
def phone_can_sms() -> str:
    """Check if this host can send SMS."""
    if telephone.is_capable_to_sms():
        return "✅ SMS available"
    return "❌ SMS unavailable"


@mcp.tool()
def phone_call(number: str) -> str:
    """Place a call to the given number via the host dialer."""
    telephone.make_call(number)
    return f"📞 Call requested: {number}"

# =============================================================================
# MAIN
# =============================================================================

def main() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    mcp.run(transport="http", host=config.SERVER_HOST, port=config.SERVER_PORT, path=config.SERVER_PATH)


if __name__ == "__main__":
    main()
