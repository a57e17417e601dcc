from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        pass

    @abstractmethod
    async def list_by_user(
        self, user_id: UUID, action: Optional[str] = None, limit: int = 50
    ) -> List[AuditEvent]:
        """Get a user's audit events, newest first, optionally filtered by action"""
        pass
