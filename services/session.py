"""
Session state with an explicit observer list.

The session is a value object passed to whoever needs it; components that
react to sign-in / sign-out subscribe to a ``SessionStore``.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional
from uuid import UUID

logger = logging.getLogger("mealgrid.session")


class SessionStatus(str, enum.Enum):
    UNKNOWN = "unknown"
    SIGNED_OUT = "signed_out"
    SIGNED_IN = "signed_in"


@dataclass(frozen=True)
class Identity:
    user_id: UUID
    email: Optional[str] = None
    full_name: Optional[str] = None


@dataclass(frozen=True)
class SessionState:
    status: SessionStatus
    identity: Optional[Identity] = None

    @classmethod
    def unknown(cls) -> "SessionState":
        return cls(SessionStatus.UNKNOWN)

    @classmethod
    def signed_out(cls) -> "SessionState":
        return cls(SessionStatus.SIGNED_OUT)

    @classmethod
    def signed_in(cls, identity: Identity) -> "SessionState":
        return cls(SessionStatus.SIGNED_IN, identity)

    @property
    def is_signed_in(self) -> bool:
        return self.status is SessionStatus.SIGNED_IN and self.identity is not None


SessionObserver = Callable[[SessionState], None]


class SessionStore:
    """Holds the current session and notifies subscribers of every change"""

    def __init__(self, state: Optional[SessionState] = None):
        self._state = state or SessionState.unknown()
        self._observers: List[SessionObserver] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        """Register ``observer``; the returned callable unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def publish(self, state: SessionState) -> None:
        self._state = state
        logger.info("session_changed status=%s", state.status.value)
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.exception("session_observer_failed observer=%r", observer)

    def sign_in(self, identity: Identity) -> None:
        self.publish(SessionState.signed_in(identity))

    def sign_out(self) -> None:
        self.publish(SessionState.signed_out())
