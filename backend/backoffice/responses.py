# Overview: JSON envelope shared by every API response.

from __future__ import annotations

from typing import Any

from flask import jsonify


def success_response(data: Any, message: str = "Operation successful", status: int = 200):
    return jsonify({
        "success": True,
        "message": message,
        "data": data,
        "errors": None,
    }), status


def error_response(message: str, status: int, errors: Any = None):
    return jsonify({
        "success": False,
        "message": message,
        "data": None,
        "errors": errors,
    }), status
