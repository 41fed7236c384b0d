# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException, NotFound

from fitcoach.shared.logging import logger

from .base import AppError, ErrorKind


def status_for(kind: ErrorKind) -> HTTPStatus:
    match kind:
        case ErrorKind.INVALID_INPUT:
            return HTTPStatus.BAD_REQUEST
        case ErrorKind.UNAUTHENTICATED:
            return HTTPStatus.UNAUTHORIZED
        case ErrorKind.FORBIDDEN:
            return HTTPStatus.FORBIDDEN
        case ErrorKind.NOT_FOUND:
            return HTTPStatus.NOT_FOUND
        case ErrorKind.CONFLICT:
            return HTTPStatus.CONFLICT
        case ErrorKind.INTERNAL:
            return HTTPStatus.INTERNAL_SERVER_ERROR


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    if error.kind is ErrorKind.INTERNAL:
        response = jsonify(
            {"success": False, "error": error.code, "message": "Internal server error"}
        )
    else:
        response = jsonify(error.to_dict())
    return response, status_for(error.kind)


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if exc.kind is ErrorKind.INTERNAL:
            logger.opt(exception=exc).error(
                f"Infrastructure error {exc.code} on {request.method} {request.path}"
            )
        else:
            logger.info(
                f"Handled application error {exc.code} ({exc.kind.value}) "
                f"on {request.method} {request.path}"
            )
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        code = "route_not_found" if isinstance(exc, NotFound) else (exc.name or "http_error")
        payload = {
            "success": False,
            "error": code.lower().replace(" ", "_"),
            "message": exc.description or exc.name,
        }
        return jsonify(payload), exc.code or default_status

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        ip_address = (
            request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
            or request.remote_addr
            or "unknown"
        )
        user_id = getattr(g, "user_id", None)

        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"from {ip_address}, user={user_id}, "
                f"query={dict(request.args)}, body_size={len(request.data)}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")

        response = jsonify(
            {"success": False, "error": "internal_error", "message": "Internal server error"}
        )
        return response, default_status
