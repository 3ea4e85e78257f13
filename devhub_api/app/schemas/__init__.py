"""
Pydantic schema definitions for API payloads.

Schemas are separated from storage rows so the API representation can
differ from the persisted one (camelCase on the wire, snake_case in
SQLite).
"""
