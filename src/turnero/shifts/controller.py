from __future__ import annotations

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..common.forms import validate_form
from ..core.enums import ShiftStatus
from ..core.results import ActionResult
from ..web.auth import admin_required, login_required
from ..web.results import flash_result, respond, result_from_error
from ..web.session import current_user
from .schemas import CreateShiftForm, ShiftForm, StatusForm
from .service import ShiftFilter, distinct_areas, filter_shifts, group_created, group_invited
from .view import build_cards


def creation_message(creation) -> str:
    parts = ["Turno creado exitosamente."]
    if creation.invited:
        parts.append(f"Se crearon {len(creation.invited)} invitación(es).")
    if creation.skipped_dnis:
        parts.append(f"No se pudo invitar a: {', '.join(creation.skipped_dnis)}.")
    return " ".join(parts)


def register(app: Flask, container) -> None:
    def _locale():
        return g.get("locale")

    def _load(fn, default):
        try:
            return fn()
        except Exception as e:
            flash_result(result_from_error(e))
            return default

    def _user_page(errors=None):
        user = g.user
        shifts = _load(lambda: container.shift_service.list_for_user(user), [])
        rooms = _load(container.room_service.list_rooms, [])
        if current_user() is None:
            return redirect(url_for("login"))
        groups = group_created(shifts, user)
        return render_template(
            "dashboard/user.html",
            user=user,
            active_cards=build_cards(groups["active"], user, _locale()),
            cancelled_cards=build_cards(groups["cancelled"], user, _locale()),
            rooms=rooms,
            statuses=list(ShiftStatus),
            errors=errors or {},
            form=request.form,
            active_page="user_dashboard",
        )

    @app.route("/dashboard/user", endpoint="user_dashboard")
    @login_required
    def user_dashboard():
        return _user_page()

    @app.route("/dashboard/user/invited-shifts", endpoint="invited_shifts")
    @login_required
    def invited_shifts():
        user = g.user
        shifts = _load(lambda: container.shift_service.list_for_user(user), [])
        if current_user() is None:
            return redirect(url_for("login"))
        groups = group_invited(shifts, user)
        return render_template(
            "dashboard/invited_shifts.html",
            user=user,
            pending_cards=build_cards(groups["pending"], user, _locale()),
            confirmed_cards=build_cards(groups["confirmed"], user, _locale()),
            cancelled_cards=build_cards(groups["cancelled"], user, _locale()),
            statuses=list(ShiftStatus),
            active_page="invited_shifts",
        )

    @app.route("/dashboard/admin", endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        user = g.user
        criteria = ShiftFilter(
            search=request.args.get("q", ""),
            status=request.args.get("status", "all"),
            area=request.args.get("area", ""),
        )
        shifts = _load(lambda: container.shift_service.list_all(current_role=user.role), [])
        if current_user() is None:
            return redirect(url_for("login"))
        return render_template(
            "dashboard/admin.html",
            user=user,
            cards=build_cards(filter_shifts(shifts, criteria), user, _locale()),
            areas=distinct_areas(shifts),
            criteria=criteria,
            statuses=list(ShiftStatus),
            active_page="admin_dashboard",
        )

    @app.route("/shifts", methods=["POST"], endpoint="create_shift")
    @login_required
    def create_shift():
        try:
            form = validate_form(CreateShiftForm, request.form.to_dict())
            creation = container.shift_service.create_shift(g.user, form)
            flash(creation_message(creation), "success")
            return redirect(url_for("user_dashboard"))
        except Exception as e:
            result = result_from_error(e)
            flash_result(result)
            if current_user() is None:
                return redirect(url_for("login"))
            return _user_page(result.errors)

    @app.route("/shifts/<shift_id>/edit", methods=["GET", "POST"], endpoint="edit_shift")
    @login_required
    def edit_shift(shift_id: str):
        errors = {}
        if request.method == "POST":
            try:
                form = validate_form(ShiftForm, request.form.to_dict())
                container.shift_service.update_shift(g.user, shift_id, form)
                flash("Turno actualizado exitosamente.", "success")
                return redirect(url_for("dashboard"))
            except Exception as e:
                result = result_from_error(e)
                flash_result(result)
                if current_user() is None:
                    return redirect(url_for("login"))
                errors = result.errors

        try:
            shift = container.shift_service.get_editable(g.user, shift_id)
        except Exception as e:
            flash_result(result_from_error(e))
            return redirect(url_for("dashboard"))

        return render_template(
            "dashboard/edit_shift.html",
            user=g.user,
            shift=shift,
            rooms=_load(container.room_service.list_rooms, []),
            errors=errors,
            form=request.form if request.method == "POST" else None,
        )

    @app.route("/shifts/<shift_id>/cancel", methods=["POST"], endpoint="cancel_shift")
    @login_required
    def cancel_shift(shift_id: str):
        try:
            container.shift_service.cancel_shift(g.user, shift_id)
            result = ActionResult.success("Turno cancelado exitosamente.", shift_id=shift_id)
        except Exception as e:
            result = result_from_error(e)
        return respond(result, "user_dashboard")

    @app.route("/shifts/<shift_id>/status", methods=["POST"], endpoint="update_shift_status")
    @admin_required
    def update_shift_status(shift_id: str):
        try:
            form = validate_form(StatusForm, request.form.to_dict())
            status = ShiftStatus(form.status)
            shift = container.shift_service.update_status(g.user, shift_id, status)
            result = ActionResult.success(
                f'El turno "{shift.theme}" ahora está {status.value}.',
                shift_id=shift_id,
                status=status.value,
            )
        except Exception as e:
            result = result_from_error(e)
        return respond(result, "admin_dashboard")

    @app.route("/shifts/<shift_id>/respond", methods=["POST"], endpoint="respond_to_invitation")
    @login_required
    def respond_to_invitation(shift_id: str):
        try:
            message = container.shift_service.respond_to_invitation(
                g.user, shift_id, request.form.get("response", "")
            )
            result = ActionResult.success(message, shift_id=shift_id)
        except Exception as e:
            result = result_from_error(e)
        return respond(result, "invited_shifts")
