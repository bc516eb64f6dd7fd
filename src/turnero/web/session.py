"""Session cookie helpers.

The session cookie holds a serialized copy of the logged-in user plus the
backend bearer token. It is a signed Flask cookie, readable by client
scripts, and lives for ``SESSION_HOURS``.
"""

from __future__ import annotations

from typing import Optional

from flask import has_request_context, session

from ..users.model import User

USER_KEY = "user"
TOKEN_KEY = "token"
LOCALE_KEY = "locale"


def store_session(user: User, token: str) -> None:
    session.clear()
    session.permanent = True
    session[USER_KEY] = user.to_dict()
    session[TOKEN_KEY] = token


def refresh_user(user: User) -> None:
    session[USER_KEY] = user.to_dict()


def current_user() -> Optional[User]:
    if not has_request_context():
        return None
    data = session.get(USER_KEY)
    if not data or not session.get(TOKEN_KEY):
        return None
    try:
        return User.from_dict(data)
    except (KeyError, ValueError):
        session.clear()
        return None


def current_token() -> Optional[str]:
    if not has_request_context():
        return None
    return session.get(TOKEN_KEY)


def clear_session() -> None:
    locale = session.get(LOCALE_KEY)
    session.clear()
    if locale:
        session[LOCALE_KEY] = locale
