from flask import jsonify


def ok(data=None, message="success", status=200):
    payload = {"status": "success", "message": message}
    if data is not None:
        payload["data"] = data
    return jsonify(payload), status


def error(message, status=400, code=None):
    return jsonify({
        "status": "error",
        "message": message,
        "code": code or status
    }), status


def validation_error_response(errors, status_code: int = 400):
    return jsonify({
        "status": "error",
        "message": "Invalid request body",
        "code": status_code,
        "errors": errors,
    }), status_code

