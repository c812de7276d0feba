"""Mock authentication provider.

A fixed staff directory looked up by e-mail and optional school ID. There is
no credential model; this stands in for a real identity provider.
"""

from typing import Dict, List, Optional

from services.content.app.exceptions import AuthenticationError
from services.content.app.repositories.access_logs import AccessLogRepository
from shared.app_logging.logger import get_logger
from shared.schemas.content import User, UserRole

logger = get_logger(__name__)


def default_users() -> List[User]:
    return [
        User(
            id="1",
            name="Auditor Admin",
            username="auditor_main",
            email="auditor@light.edu",
            school_id="2020-0001",
            role=UserRole.AUDITOR,
            avatar="https://i.pravatar.cc/150?u=auditor",
            specialization="System Administration",
        ),
        User(
            id="2",
            name="Jane EIC",
            username="jane_writes",
            email="eic@light.edu",
            school_id="2021-0055",
            role=UserRole.EIC,
            avatar="https://i.pravatar.cc/150?u=eic",
            specialization="Editorial Writing",
        ),
        User(
            id="3",
            name="John Head",
            username="sports_john",
            email="head@light.edu",
            school_id="2022-1024",
            role=UserRole.HEAD,
            avatar="https://i.pravatar.cc/150?u=head",
            specialization="Sports Journalism",
        ),
        User(
            id="4",
            name="Jimmy Pen",
            username="jimmy_p",
            email="writer@light.edu",
            school_id="2023-0512",
            role=UserRole.JOURNALIST,
            avatar="https://i.pravatar.cc/150?u=writer",
            specialization="Features",
        ),
    ]


class MockAuthProvider:
    def __init__(self, access_logs: AccessLogRepository, users: Optional[List[User]] = None):
        self.access_logs = access_logs
        self._users: Dict[str, User] = {u.id: u for u in (users or default_users())}
        self._current: Optional[User] = None

    async def login(self, email: str, school_id: Optional[str] = None) -> User:
        """Match by e-mail, and by school ID too when one is given."""
        email = (email or "").strip().lower()
        for user in self._users.values():
            if user.email.lower() != email:
                continue
            if school_id and user.school_id != school_id:
                continue
            self._current = user
            await self.access_logs.record("LOGIN", f"User {user.name} logged in.", user)
            logger.info(f"User {user.id} logged in")
            return user.model_copy()
        raise AuthenticationError("Invalid credentials. Please check your Email and School ID.")

    def current_user(self) -> Optional[User]:
        return self._current.model_copy() if self._current else None

    async def logout(self) -> None:
        self._current = None

    async def get_user(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None
