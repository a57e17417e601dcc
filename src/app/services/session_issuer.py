from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import UUID

from src.domain.entities import UserRole


@dataclass(frozen=True)
class IssuedSession:
    access_token: str
    token_type: str
    expires_in: int  # seconds


class ISessionIssuer(ABC):
    """Mints the final authenticated session once every factor has passed"""

    @abstractmethod
    def issue(self, user_id: UUID, email: str, role: UserRole) -> IssuedSession:
        pass
