"""
Service layer for login and logout.

Credentials are compared as stored; hashing is outside the kernel.  Both
failure cases (unknown email, wrong password) raise the same
AuthenticationError so callers cannot tell which emails exist.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from payroll_kernel.domain.auth_session import SessionState
from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.dtos import AgentInfo
from payroll_kernel.exceptions import AuthenticationError
from payroll_kernel.logging_config import get_logger
from payroll_kernel.models.agent import Agent
from payroll_kernel.selectors.agent_selector import AgentSelector
from payroll_kernel.services.base import BaseService

logger = get_logger("services.auth")


class AuthService(BaseService[Agent]):
    """Authenticates agents into an explicit ``SessionState``."""

    def __init__(
        self,
        session: Session,
        state: SessionState,
        clock: Clock | None = None,
    ):
        super().__init__(session)
        self._state = state
        self._clock = clock or SystemClock()

    def login(self, email: str, password: str) -> AgentInfo:
        """
        Start a session for the agent owning ``email``.

        Any previous session is replaced.

        Raises:
            AuthenticationError: Unknown email or wrong password.
        """
        info = AgentSelector(self.session).find_by_email(email)
        if info is None or self.session.get(Agent, info.id).password != password:
            logger.warning("login_failed")
            raise AuthenticationError()

        self._state.start(info, self._clock.now())
        logger.info("login_succeeded", extra={"agent_id": info.id})
        return info

    def logout(self) -> None:
        current = self._state.current_agent
        self._state.end()
        if current is not None:
            logger.info("logout", extra={"agent_id": current.id})

    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    def current_agent(self) -> AgentInfo | None:
        return self._state.current_agent
