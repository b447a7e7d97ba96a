from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.auth import api_admin_required, api_login_required, current_identity
from ..common.http import domain_error_response, internal_error_response, json_error, request_json
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..core.exceptions import DomainError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = request_json()
        try:
            s_user = container.auth_service.authenticate(body.get("username", ""), body.get("password", ""))
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            return internal_error_response("Failed to log in")

        session.clear()
        session.permanent = bool(body.get("rememberMe"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return jsonify({"user": {"id": s_user.user_id, "name": s_user.full_name, "role": s_user.role.value}})

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @api_login_required
    def me():
        identity = current_identity()
        try:
            s_user = container.auth_service.load_session_user(identity.user_id)
        except DomainError as e:
            session.clear()
            return domain_error_response(e)
        except Exception:
            return internal_error_response("Failed to load session")
        return jsonify({"user": {"id": s_user.user_id, "name": s_user.full_name, "role": s_user.role.value}})

    @app.route("/admin/users", methods=["GET"], endpoint="admin_users")
    @api_admin_required
    def admin_users():
        try:
            return jsonify(list(container.user_service.list_admin_view()))
        except Exception:
            return internal_error_response("Failed to fetch users")

    @app.route("/admin/users", methods=["POST"], endpoint="add_user")
    @api_admin_required
    def add_user():
        body = request_json()
        try:
            try:
                role = Role(body.get("role", Role.STAFF.value))
            except ValueError:
                raise ValidationError("Invalid role")

            user_id = container.user_service.create_account(
                full_name=body.get("fullName", ""),
                username=body.get("username", ""),
                password=body.get("password", ""),
                role=role,
            )
        except DomainError as e:
            return domain_error_response(e, unauthorized_status=403)
        except Exception:
            return internal_error_response("Failed to create user")
        return jsonify({"userId": user_id}), 201

    @app.route("/admin/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @api_admin_required
    def delete_user(user_id: int):
        if current_identity().user_id == user_id:
            return json_error("You cannot delete your own account", 400)
        try:
            container.user_service.delete_user(current_role=Role(session.get("role")), user_id=user_id)
        except DomainError as e:
            return domain_error_response(e, unauthorized_status=403)
        except Exception:
            return internal_error_response("Failed to delete user")
        return jsonify({"success": True})
