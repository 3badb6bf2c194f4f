"""
Client-side session lifecycle.

``SessionManager`` logs in, keeps the token pair in the storage picked by
"remember me", refreshes the access token shortly before it expires and
drops everything on logout or on the first failed refresh::

    UNAUTHENTICATED -> AUTHENTICATING -> AUTHENTICATED -> REFRESHING
                                              ^               |
                                              +---------------+  (success)
                                         UNAUTHENTICATED <----+  (failure)
"""

from __future__ import annotations

import enum
import logging
import threading
import time
from collections.abc import Callable
from typing import Any

import jwt
import requests

from studiosite.client.auth import BearerAuth
from studiosite.client.errors import ApiError, error_for_response
from studiosite.client.storage import MemoryTokenStorage, StoredSession, TokenStorage

log = logging.getLogger(__name__)

#: Refresh this many seconds before the access token expires.
REFRESH_MARGIN_SECONDS = 60
#: Delay used when the access token carries no readable ``exp``.
FALLBACK_REFRESH_SECONDS = 14 * 60

_REQUIRED_USER_KEYS = ("id", "email", "role")


class SessionState(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    REFRESHING = "refreshing"


def unwrap(response: requests.Response) -> Any:
    """Return ``data`` from a success envelope or raise the matching error."""
    if not response.ok:
        raise error_for_response(response)
    if response.status_code == 204 or not response.content:
        return None
    body = response.json()
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


def token_expiry(token: str) -> float | None:
    """``exp`` of ``token`` as a UNIX timestamp, read without verification."""
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return None
    exp = claims.get("exp")
    return float(exp) if isinstance(exp, int | float) else None


def is_valid_record(record: Any) -> bool:
    """A stored session is usable when it has both tokens and a complete user."""
    if not isinstance(record, dict):
        return False
    user = record.get("user")
    if not isinstance(user, dict) or any(user.get(key) in (None, "") for key in _REQUIRED_USER_KEYS):
        return False
    return all(isinstance(record.get(key), str) and record[key] for key in ("accessToken", "refreshToken"))


class SessionManager:
    """
    Own the token pair of one API client.

    Parameters
    ----------
    base_url:
        Server origin, e.g. ``"https://studio.example.com"``.
    http:
        Shared ``requests.Session``; the bearer hook is installed on it once.
    durable_storage:
        Storage used when logging in with ``remember_me=True``.
    session_storage:
        Storage used otherwise. Defaults to process memory.
    timer_factory:
        ``threading.Timer``-compatible factory; injectable for tests.
    clock:
        Wall-clock source returning UNIX seconds.

    Notes
    -----
    At most one refresh timer is pending. Every (re)schedule and every
    logout bumps a generation counter; a timer that fires for an older
    generation does nothing.
    """

    def __init__(
        self,
        base_url: str,
        *,
        http: requests.Session | None = None,
        durable_storage: TokenStorage | None = None,
        session_storage: TokenStorage | None = None,
        timer_factory: Callable[..., Any] = threading.Timer,
        clock: Callable[[], float] = time.time,
        refresh_margin: float = REFRESH_MARGIN_SECONDS,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.durable_storage = durable_storage or MemoryTokenStorage()
        self.session_storage = session_storage or MemoryTokenStorage()
        self.timer_factory = timer_factory
        self.clock = clock
        self.refresh_margin = refresh_margin
        self.timeout = timeout

        self._lock = threading.RLock()
        self._state = SessionState.UNAUTHENTICATED
        self._record: StoredSession | None = None
        self._storage: TokenStorage | None = None
        self._timer: Any = None
        self._generation = 0

        self.http.auth = BearerAuth(self.access_token)

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state in (SessionState.AUTHENTICATED, SessionState.REFRESHING)

    @property
    def user(self) -> dict[str, Any] | None:
        with self._lock:
            return dict(self._record["user"]) if self._record else None

    def access_token(self) -> str | None:
        with self._lock:
            return self._record["accessToken"] if self._record else None

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #

    def login(self, email: str, password: str, *, remember_me: bool = False) -> dict[str, Any]:
        """
        Authenticate and start the refresh cycle.

        :returns: The user record sent by the server.
        :raises ApiError: On a non-2xx answer. Any previous session is
            logged out, so state is ``UNAUTHENTICATED`` with nothing stored.
        :raises requests.RequestException: On transport failure (same).
        """
        with self._lock:
            self._cancel_timer()
            self._state = SessionState.AUTHENTICATING

        try:
            response = self.http.post(
                self._url("/api/auth/login"),
                json={"email": email, "password": password, "rememberMe": remember_me},
                timeout=self.timeout,
            )
            data = unwrap(response)
            record = {
                "accessToken": data["accessToken"],
                "refreshToken": data["refreshToken"],
                "user": data["user"],
            }
        except (ApiError, requests.RequestException, KeyError, TypeError, ValueError):
            log.info("session.login.failed")
            # any previous session is dropped too
            self.logout()
            raise

        with self._lock:
            target, other = (
                (self.durable_storage, self.session_storage)
                if remember_me
                else (self.session_storage, self.durable_storage)
            )
            other.clear()
            target.save(record)
            self._record = record
            self._storage = target
            self._state = SessionState.AUTHENTICATED
            self._schedule_refresh()
        log.info("session.login.succeeded")
        return dict(record["user"])

    def refresh(self) -> bool:
        """
        Exchange the refresh token for a new access token.

        Any failure ends the session (``logout``).

        :returns: ``True`` when a new access token was stored.
        """
        with self._lock:
            if self._record is None or self._state != SessionState.AUTHENTICATED:
                return False
            self._state = SessionState.REFRESHING
            generation = self._generation
            refresh_token = self._record["refreshToken"]

        try:
            response = self.http.post(
                self._url("/api/auth/refresh"),
                json={"refreshToken": refresh_token},
                timeout=self.timeout,
            )
            access_token = unwrap(response)["accessToken"]
            if not isinstance(access_token, str) or not access_token:
                raise ValueError("empty access token")
        except (ApiError, requests.RequestException, KeyError, TypeError, ValueError) as exc:
            log.warning("session.refresh.failed: %s", exc)
            with self._lock:
                if generation == self._generation:
                    self.logout()
            return False

        with self._lock:
            if generation != self._generation or self._record is None:
                # logged out (or in again) while the request was in flight
                return False
            self._record = {**self._record, "accessToken": access_token}
            if self._storage is not None:
                self._storage.save(self._record)
            self._state = SessionState.AUTHENTICATED
            self._schedule_refresh()
        log.debug("session.refresh.succeeded")
        return True

    def logout(self) -> None:
        """Cancel the pending refresh and forget every stored credential."""
        with self._lock:
            self._cancel_timer()
            self.durable_storage.clear()
            self.session_storage.clear()
            self._record = None
            self._storage = None
            self._state = SessionState.UNAUTHENTICATED
        log.info("session.logout")

    def restore(self) -> bool:
        """
        Resume a stored session (durable storage first, then session storage).

        :returns: ``True`` when a valid session was found and resumed. An
            invalid record is discarded via :meth:`logout`.
        """
        with self._lock:
            for storage in (self.durable_storage, self.session_storage):
                record = storage.load()
                if record is not None:
                    break
            else:
                return False

            if not is_valid_record(record):
                log.warning("session.restore.invalid")
                self.logout()
                return False

            self._record = {
                "accessToken": record["accessToken"],
                "refreshToken": record["refreshToken"],
                "user": record["user"],
            }
            self._storage = storage
            self._state = SessionState.AUTHENTICATED
            self._schedule_refresh()
        log.info("session.restored")
        return True

    # ------------------------------------------------------------------ #
    # Timer
    # ------------------------------------------------------------------ #

    def refresh_delay(self, access_token: str) -> float:
        """Seconds until ``refresh_margin`` before the token's ``exp``."""
        exp = token_expiry(access_token)
        if exp is None:
            return float(FALLBACK_REFRESH_SECONDS)
        return max(exp - self.clock() - self.refresh_margin, 0.0)

    def _schedule_refresh(self) -> None:
        # caller holds the lock
        self._cancel_timer()
        if self._record is None:
            return
        delay = self.refresh_delay(self._record["accessToken"])
        generation = self._generation
        timer = self.timer_factory(delay, self._on_timer, args=(generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel_timer(self) -> None:
        # caller holds the lock
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                log.debug("session.refresh.stale_timer")
                return
            self._timer = None
        self.refresh()
