from __future__ import annotations

from flask import Flask, flash, g, redirect, render_template, request, session, url_for

from ..common.forms import validate_form
from ..core.constants import SUPPORTED_LOCALES
from ..storage.profile_pictures import UploadedFile
from ..web.auth import login_required
from ..web.results import flash_result, result_from_error
from ..web.session import LOCALE_KEY, clear_session, current_token, current_user, refresh_user, store_session
from .schemas import (
    ChangePasswordForm,
    ForgotPasswordForm,
    LoginForm,
    RegisterForm,
    ResetPasswordForm,
    UpdateProfileForm,
)


def _home_for(user) -> str:
    return url_for("admin_dashboard") if user.is_admin else url_for("user_dashboard")


def register(app: Flask, container) -> None:
    @app.route("/", endpoint="index")
    def index():
        user = current_user()
        if user is None:
            return redirect(url_for("login"))
        return redirect(_home_for(user))

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        return redirect(_home_for(g.user))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        user = current_user()
        if user is not None:
            return redirect(_home_for(user))

        errors = {}
        if request.method == "POST":
            try:
                form = validate_form(LoginForm, request.form.to_dict())
                user, token = container.auth_service.login(form)
                store_session(user, token)
                flash(f"Bienvenido, {user.full_name}.", "success")
                return redirect(_home_for(user))
            except Exception as e:
                result = result_from_error(e)
                flash_result(result)
                errors = result.errors

        return render_template(
            "auth/login.html",
            errors=errors,
            form=request.form,
            reset_ok=request.args.get("reset") == "success",
        )

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    def register_user():
        errors = {}
        if request.method == "POST":
            try:
                form = validate_form(RegisterForm, request.form.to_dict())
                message = container.auth_service.register(form)
                flash(message, "success")
                return redirect(url_for("login"))
            except Exception as e:
                result = result_from_error(e)
                flash_result(result)
                errors = result.errors

        return render_template("auth/register.html", errors=errors, form=request.form)

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        container.auth_service.logout(current_token())
        clear_session()
        flash("Sesión cerrada.", "info")
        return redirect(url_for("login"))

    @app.route("/forgot-password", methods=["GET", "POST"], endpoint="forgot_password")
    def forgot_password():
        errors = {}
        if request.method == "POST":
            try:
                form = validate_form(ForgotPasswordForm, request.form.to_dict())
                message = container.auth_service.request_password_reset(form)
                flash(message, "success")
                return redirect(url_for("reset_password", dni=form.dni))
            except Exception as e:
                result = result_from_error(e)
                flash_result(result)
                errors = result.errors

        return render_template("auth/forgot_password.html", errors=errors, form=request.form)

    @app.route("/reset-password", methods=["GET", "POST"], endpoint="reset_password")
    def reset_password():
        errors = {}
        form_data = request.form if request.method == "POST" else request.args
        if request.method == "POST":
            try:
                form = validate_form(ResetPasswordForm, request.form.to_dict())
                container.auth_service.reset_password(form)
                return redirect(url_for("login", reset="success"))
            except Exception as e:
                result = result_from_error(e)
                flash_result(result)
                errors = result.errors

        return render_template("auth/reset_password.html", errors=errors, form=form_data)

    @app.route("/locale/<code>", endpoint="set_locale")
    def set_locale(code: str):
        if code in SUPPORTED_LOCALES:
            session[LOCALE_KEY] = code
        return redirect(url_for("index"))

    # --- settings ------------------------------------------------------

    def _settings_page(errors=None):
        return render_template(
            "dashboard/settings.html",
            user=g.user,
            errors=errors or {},
            form=request.form,
            active_page="settings",
        )

    @app.route("/dashboard/settings", endpoint="settings")
    @login_required
    def settings():
        return _settings_page()

    @app.route("/dashboard/settings/profile", methods=["POST"], endpoint="update_profile")
    @login_required
    def update_profile():
        try:
            form = validate_form(UpdateProfileForm, request.form.to_dict())
            user, message = container.profile_service.update_profile(g.user, form)
            refresh_user(user)
            flash(message, "success")
            return redirect(url_for("settings"))
        except Exception as e:
            result = result_from_error(e)
            flash_result(result)
            if current_user() is None:
                return redirect(url_for("login"))
            return _settings_page(result.errors)

    @app.route("/dashboard/settings/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        try:
            form = validate_form(ChangePasswordForm, request.form.to_dict())
            message = container.profile_service.change_password(g.user, form)
            flash(message, "success")
            return redirect(url_for("settings"))
        except Exception as e:
            result = result_from_error(e)
            flash_result(result)
            if current_user() is None:
                return redirect(url_for("login"))
            return _settings_page(result.errors)

    @app.route("/dashboard/settings/picture", methods=["POST"], endpoint="update_profile_picture")
    @login_required
    def update_profile_picture():
        try:
            if request.form.get("remove_profile_picture"):
                user, message = container.profile_service.remove_profile_picture(g.user)
            else:
                storage = request.files.get("profile_picture")
                upload = None
                if storage is not None and storage.filename:
                    upload = UploadedFile(
                        filename=storage.filename,
                        content_type=storage.mimetype or "",
                        content=storage.read(),
                    )
                user, message = container.profile_service.update_profile_picture(g.user, upload)
            refresh_user(user)
            flash(message, "success")
            return redirect(url_for("settings"))
        except Exception as e:
            result = result_from_error(e)
            flash_result(result)
            if current_user() is None:
                return redirect(url_for("login"))
            return _settings_page(result.errors)
