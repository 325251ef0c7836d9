"""Append-only audit trail for catalog and login events."""
