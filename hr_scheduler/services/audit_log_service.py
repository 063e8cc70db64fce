"""Service for writing audit log entries inside the caller's transaction."""

import logging
from typing import Any, Dict, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from hr_scheduler.models.audit_log import AuditLog
from hr_scheduler.schemas.interview import AuditContext

logger = logging.getLogger(__name__)


class AuditLogService:
    """Records who changed which interview, with before/after snapshots."""

    async def log_action(
        self,
        db: AsyncSession,
        audit: AuditContext,
        action: str,
        entity_id: Optional[int] = None,
        old_values: Optional[Dict[str, Any]] = None,
        new_values: Optional[Dict[str, Any]] = None,
        entity_type: str = "interview",
    ) -> AuditLog:
        """
        Add an audit entry to the session. It commits or rolls back together
        with the operation that produced it.

        Args:
            db: Session of the running operation
            audit: Actor, IP address, user agent and timestamp
            action: CREATE, UPDATE, DELETE or PURGE
            entity_id: Id of the affected record, if any
            old_values: JSON-serialisable snapshot before the change
            new_values: JSON-serialisable snapshot after the change
        """
        entry = AuditLog(
            user_id=audit.user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            old_values=old_values,
            new_values=new_values,
            ip_address=audit.ip_address,
            user_agent=audit.user_agent,
            timestamp=audit.timestamp,
        )
        db.add(entry)
        await db.flush()
        logger.info(
            f"Audit {action} {entity_type} {entity_id} by user {audit.user_id} "
            f"from {audit.ip_address or 'unknown'}"
        )
        return entry
