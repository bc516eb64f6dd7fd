from __future__ import annotations

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..common.forms import validate_form
from ..web.auth import admin_required
from ..web.results import flash_result, result_from_error
from ..web.session import current_user
from .schemas import RoomForm


def register(app: Flask, container) -> None:
    def _rooms_page(errors=None):
        rooms = []
        try:
            rooms = container.room_service.list_rooms()
        except Exception as e:
            flash_result(result_from_error(e))
        return render_template(
            "admin/rooms.html",
            user=g.user,
            rooms=rooms,
            errors=errors or {},
            form=request.form,
            active_page="admin_rooms",
        )

    @app.route("/dashboard/admin/rooms", methods=["GET", "POST"], endpoint="admin_rooms")
    @admin_required
    def admin_rooms():
        if request.method == "POST":
            try:
                form = validate_form(RoomForm, request.form.to_dict())
                container.room_service.add_room(current_role=g.user.role, form=form)
                flash("Sala agregada exitosamente.", "success")
                return redirect(url_for("admin_rooms"))
            except Exception as e:
                result = result_from_error(e)
                flash_result(result)
                if current_user() is None:
                    return redirect(url_for("login"))
                return _rooms_page(result.errors)

        return _rooms_page()

    @app.route("/dashboard/admin/rooms/<room_id>/delete", methods=["POST"], endpoint="delete_room")
    @admin_required
    def delete_room(room_id: str):
        try:
            room = container.room_service.delete_room(current_role=g.user.role, room_id=room_id)
            flash(f'Sala "{room.name}" eliminada exitosamente.', "success")
        except Exception as e:
            flash_result(result_from_error(e))
            if current_user() is None:
                return redirect(url_for("login"))

        return redirect(url_for("admin_rooms"))
