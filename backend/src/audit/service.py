"""Audit logging service for security events.

All security-relevant events go through this module so that every entry has
the same shape.

Audit Events:
- LOGIN_SUCCESS, LOGIN_FAILED
- PRODUCT_CREATED, PRODUCT_UPDATED, PRODUCT_DELETED
- PERMISSION_DENIED
"""

from typing import Optional, Dict, Any
from uuid import UUID

from fastapi import Request
from sqlalchemy.orm import Session

from models.audit_log import AuditLog


def client_ip(request: Request) -> Optional[str]:
    """Client IP address, preferring the first X-Forwarded-For hop."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else None


def log_audit_event(
    db: Session,
    organization_id: Optional[UUID],
    action: str,
    actor_id: Optional[UUID] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[UUID] = None,
    metadata: Optional[Dict[str, Any]] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> AuditLog:
    """Create an audit log entry.

    The entry is flushed but not committed; it becomes durable with the
    caller's transaction.

    Args:
        db: Database session
        organization_id: Tenant the event belongs to (None when unknown)
        action: Event action (e.g., "PRODUCT_CREATED", "LOGIN_FAILED")
        actor_id: User who performed the action (None for anonymous events)
        entity_type: Type of entity affected (e.g., "product")
        entity_id: ID of affected entity
        metadata: Additional context as JSON
        ip_address: Client IP address
        user_agent: Client User-Agent header

    Returns:
        AuditLog: The created audit log entry
    """
    audit_entry = AuditLog(
        organization_id=organization_id,
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        metadata_json=metadata,
        ip_address=ip_address,
        user_agent=user_agent,
    )

    db.add(audit_entry)
    db.flush()

    return audit_entry


def log_from_request(
    db: Session,
    request: Request,
    organization_id: Optional[UUID],
    action: str,
    actor_id: Optional[UUID] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[UUID] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> AuditLog:
    """Create an audit log entry with IP and User-Agent taken from the request."""
    return log_audit_event(
        db=db,
        organization_id=organization_id,
        action=action,
        actor_id=actor_id,
        entity_type=entity_type,
        entity_id=entity_id,
        metadata=metadata,
        ip_address=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
