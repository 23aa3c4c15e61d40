"""
Authentication session state.

A single process-wide login is modelled as an explicit ``SessionState``
object handed to the auth service, never as a module-level singleton.
Starting a session replaces any previous one; ending it clears the state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from payroll_kernel.domain.dtos import AgentInfo


@dataclass(frozen=True)
class AuthSession:
    """The authenticated agent and the moment authentication began."""

    agent: AgentInfo
    started_at: datetime


class SessionState:
    """Holder for at most one ``AuthSession``."""

    def __init__(self) -> None:
        self._current: AuthSession | None = None

    @property
    def current(self) -> AuthSession | None:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    @property
    def current_agent(self) -> AgentInfo | None:
        return self._current.agent if self._current is not None else None

    def start(self, agent: AgentInfo, started_at: datetime) -> AuthSession:
        """Begin a session for ``agent``, silently replacing any prior one."""
        self._current = AuthSession(agent=agent, started_at=started_at)
        return self._current

    def end(self) -> None:
        self._current = None
