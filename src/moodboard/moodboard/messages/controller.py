from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import api_login_required, current_identity
from ..common.http import internal_error_response, json_error, request_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/messages/typing", methods=["POST"], endpoint="set_typing")
    @api_login_required
    def set_typing():
        identity = current_identity()
        body = request_json()
        other_user_id = body.get("otherUserId")
        if not other_user_id:
            return json_error("Missing otherUserId", 400)
        try:
            container.typing_service.set_typing(
                user_id=identity.user_id,
                user_name=identity.name,
                other_user_id=str(other_user_id),
                is_typing=bool(body.get("isTyping")),
            )
        except Exception:
            return internal_error_response("Internal server error")
        return jsonify({"success": True})

    @app.route("/messages/typing", methods=["GET"], endpoint="get_typing")
    @api_login_required
    def get_typing():
        identity = current_identity()
        other_user_id = request.args.get("otherUserId")
        if not other_user_id:
            return json_error("Missing otherUserId", 400)
        try:
            return jsonify(container.typing_service.is_typing(user_id=identity.user_id, other_user_id=other_user_id))
        except Exception:
            return internal_error_response("Internal server error")
