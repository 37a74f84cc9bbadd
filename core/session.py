"""
core/session.py
---------------
Session Provider for the hosted auth service.

One `SessionProvider` wraps one Supabase auth client. It is created
explicitly and handed to whatever needs the signed-in user (pages, the
upload flow); there is no module-level session. The provider owns the only
subscription to the auth client's state changes and fans them out to its
own listeners. In the Streamlit shell the listener is a `SessionNotices`
queue drained by the sidebar.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from supabase_client.errors import classify


@dataclass(frozen=True)
class AuthSession:
    """The bits of a Supabase session the application uses."""
    user_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None

    @classmethod
    def from_supabase(cls, session: Any) -> Optional["AuthSession"]:
        if session is None or getattr(session, "user", None) is None:
            return None
        user = session.user
        return cls(
            user_id=str(user.id),
            email=getattr(user, "email", None),
            access_token=getattr(session, "access_token", None),
        )


SessionListener = Callable[[Optional[AuthSession]], None]


class SessionProvider:
    """Current session + change notifications over a Supabase auth client."""

    def __init__(self, auth_client: Any):
        self._auth = auth_client
        self._session: Optional[AuthSession] = None
        self._loading = True
        self._listeners: List[SessionListener] = []
        self._subscription = None

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    def start(self) -> "SessionProvider":
        """Load the initial session and subscribe to auth changes."""
        if self._subscription is None:
            self._subscription = self._auth.on_auth_state_change(self._on_auth_change)
        try:
            initial = self._auth.get_session()
        except Exception as e:
            self._loading = False
            raise classify(e) from e
        self._set(AuthSession.from_supabase(initial))
        return self

    def close(self) -> None:
        """
        Drop the auth-state listener; local listeners are forgotten too.

        For owners that outlive their auth client (scripts, tests). A Streamlit
        session discards client and provider together, so the UI never calls it.
        """
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._listeners.clear()

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #
    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def signed_in(self) -> bool:
        return self._session is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener; returns the matching unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _on_auth_change(self, _event: Any, session: Any) -> None:
        self._set(AuthSession.from_supabase(session))

    def _set(self, session: Optional[AuthSession]) -> None:
        self._loading = False
        if session == self._session:
            return
        self._session = session
        for listener in list(self._listeners):
            listener(session)

    # ------------------------------------------------------------------ #
    # Actions
    # ------------------------------------------------------------------ #
    def sign_in(self, email: str, password: str) -> Optional[AuthSession]:
        try:
            res = self._auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            raise classify(e) from e
        self._set(AuthSession.from_supabase(getattr(res, "session", None)))
        return self._session

    def sign_up(self, email: str, password: str) -> Optional[AuthSession]:
        """Register; the session stays empty while email confirmation is pending."""
        try:
            res = self._auth.sign_up({"email": email, "password": password})
        except Exception as e:
            raise classify(e) from e
        self._set(AuthSession.from_supabase(getattr(res, "session", None)))
        return self._session

    def sign_out(self) -> None:
        try:
            self._auth.sign_out()
        except Exception as e:
            raise classify(e) from e
        self._set(None)


class SessionNotices:
    """
    Listener that turns session changes into one-line notices.

    Auth events can arrive on the client's token-refresh thread, so notices
    are queued under a lock and drained by the page on its next run. A token
    refresh for the same user produces nothing.
    """

    def __init__(self, initial: Optional[AuthSession] = None):
        self._lock = threading.Lock()
        self._pending: List[str] = []
        self._email = initial.email if initial else None
        self._signed_in = initial is not None

    def __call__(self, session: Optional[AuthSession]) -> None:
        with self._lock:
            if session is None:
                if self._signed_in:
                    self._pending.append("You have been signed out.")
            elif not self._signed_in or session.email != self._email:
                self._pending.append(f"Signed in as {session.email or 'unknown user'}")
            self._signed_in = session is not None
            self._email = session.email if session else None

    def drain(self) -> List[str]:
        with self._lock:
            pending, self._pending = self._pending, []
        return pending
