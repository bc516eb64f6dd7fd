from __future__ import annotations

import logging

from flask import flash, jsonify, redirect, request, url_for

from ..core.exceptions import BackendError, DomainError
from ..core.results import ActionResult
from .session import clear_session, current_token, current_user

logger = logging.getLogger(__name__)

SYSTEM_ERROR_MESSAGE = "Error inesperado del sistema."


def flash_result(result: ActionResult) -> None:
    flash(result.message, result.flash_category)


def result_from_error(exc: Exception) -> ActionResult:
    """Map any failure to a tagged error result; expired tokens clear the session."""
    if isinstance(exc, BackendError) and exc.is_auth_failure and current_token():
        clear_session()
        return ActionResult.error("Tu sesión expiró. Inicia sesión nuevamente.")
    if isinstance(exc, DomainError):
        return ActionResult.from_exception(exc)
    logger.exception("unexpected error handling %s %s", request.method, request.path)
    return ActionResult.error(SYSTEM_ERROR_MESSAGE)


def wants_json() -> bool:
    best = request.accept_mimetypes.best_match(["application/json", "text/html"])
    return best == "application/json" and request.accept_mimetypes[best] > request.accept_mimetypes["text/html"]


def respond(result: ActionResult, fallback_endpoint: str):
    """Answer a card action: JSON for fetch callers, toast + redirect otherwise."""
    if wants_json():
        return jsonify(result.to_dict()), (200 if result.ok else 400)
    flash_result(result)
    if current_user() is None:
        return redirect(url_for("login"))
    target = request.form.get("next") or ""
    if not target.startswith("/") or target.startswith("//"):
        target = url_for(fallback_endpoint)
    return redirect(target)
