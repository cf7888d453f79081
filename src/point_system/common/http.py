from __future__ import annotations

from datetime import time

from flask import Flask, jsonify

from ..core.constants import TIME_FORMAT
from ..core.exceptions import DomainError

STATUS_BY_KIND = {
    "validation_error": 400,
    "decode_error": 400,
    "not_found": 404,
    "repository_error": 500,
    "deadline_exceeded": 504,
}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = STATUS_BY_KIND.get(exc.kind, 400)
        if status >= 500:
            app.logger.error("%s: %s", exc.kind, exc)
        return jsonify({"error": str(exc), "kind": exc.kind}), status


def clock(value: time | None) -> str | None:
    return value.strftime(TIME_FORMAT) if value else None
