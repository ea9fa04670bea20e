from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from ..common.validators import is_blank, require_optional_str
from ..container import Container
from ..core.constants import AUTH_HEADER, BEARER_PREFIX
from ..core.enums import Permission, UserStatus
from ..core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from .model import NewUser, ProfileEdits, StatusEdits, User

LOGGER = logging.getLogger(__name__)

TEXT_FIELDS = ("username", "name", "password", "birthday", "token")


def user_to_dict(user: User, *, include_token: bool = False) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": user.user_id,
        "username": user.username,
        "name": user.name,
        "birthday": user.birthday,
        "status": user.status.value,
    }
    if include_token:
        out["token"] = user.token
    return out


def _auth_token() -> str:
    token = request.headers.get(AUTH_HEADER, "")
    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):]
    return token.strip()


def _json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    for field in TEXT_FIELDS:
        require_optional_str(body.get(field), field)
    return body


def _parse_status(body: Dict[str, Any]) -> UserStatus:
    # Absent and null are rejected here; OFFLINE is never assumed.
    value: Optional[str] = body.get("status")
    if value is None:
        raise BadRequestError("Status not provided")
    try:
        return UserStatus(str(value).upper())
    except ValueError:
        raise BadRequestError("Status must be ONLINE or OFFLINE")


def register(app: Flask, container: Container) -> None:
    service = container.user_service

    def require_read() -> None:
        if not service.authorize(_auth_token(), Permission.READ):
            raise ForbiddenError("Forbidden action")

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(BadRequestError)
    def handle_bad_request(e: BadRequestError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(ForbiddenError)
    def handle_forbidden(e: ForbiddenError):
        return jsonify({"error": str(e)}), 403

    @app.route("/users", methods=["GET"], endpoint="list_users")
    def list_users():
        require_read()
        return jsonify([user_to_dict(u) for u in service.list_users()]), 200

    @app.route("/users", methods=["POST"], endpoint="create_user")
    def create_user():
        # No authorization: anyone may register.
        body = _json_body()
        created = service.create_user(
            NewUser(
                username=body.get("username"),
                name=body.get("name"),
                password=body.get("password"),
                birthday=body.get("birthday"),
            )
        )
        LOGGER.info("Registered user id=%s", created.user_id)
        return jsonify(user_to_dict(created, include_token=True)), 201

    @app.route("/users/<int:user_id>", methods=["GET"], endpoint="get_user")
    def get_user(user_id: int):
        require_read()
        return jsonify(user_to_dict(service.get_user_by_id(user_id))), 200

    @app.route("/users/auth", methods=["POST"], endpoint="authenticate")
    def authenticate():
        body = _json_body()
        username = body.get("username")
        password = body.get("password")
        token = body.get("token")

        if not is_blank(username) and not is_blank(password):
            user = service.authenticate_by_credentials(username, password)
        elif not is_blank(token):
            user = service.authenticate_by_token(token)
        else:
            raise BadRequestError("Either pass username,password or pass token")

        return jsonify(user_to_dict(user, include_token=True)), 200

    @app.route("/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    def update_user(user_id: int):
        body = _json_body()
        service.update_profile(
            ProfileEdits(
                username=body.get("username"),
                name=body.get("name"),
                birthday=body.get("birthday"),
            ),
            user_id,
            _auth_token(),
        )
        return "", 204

    @app.route("/users/<int:user_id>/status", methods=["PATCH"], endpoint="update_user_status")
    def update_user_status(user_id: int):
        status = _parse_status(_json_body())
        service.update_status(StatusEdits(status=status), user_id, _auth_token())
        return "", 204
