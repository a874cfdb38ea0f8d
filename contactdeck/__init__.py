"""
contactdeck

Contacts access, alphabetic grouping, search and telephony checks over
pluggable host adapters, with an MCP tool surface.
"""

__version__ = "0.1.0"
