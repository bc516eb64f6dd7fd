from __future__ import annotations

from functools import wraps

from flask import g, redirect, render_template, url_for

from ..core.enums import Role
from .session import current_user


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            return redirect(url_for("login"))
        g.user = user
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            return redirect(url_for("login"))
        if user.role != Role.ADMIN:
            return render_template("403.html", current_user=user), 403
        g.user = user
        return view(*args, **kwargs)

    return wrapper
