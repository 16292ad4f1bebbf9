"""
Pydantic schema definitions for API payloads and stored records.

The ``Product`` model doubles as the persisted record: the SQLite
store keeps its JSON serialization, so the API representation and the
stored representation are the same document.
"""
