from flask import jsonify


def ok(data=None, message="success", status=200):
    payload = {"status": "success", "message": message}
    if data is not None:
        payload["data"] = data
    return jsonify(payload), status


def error(message, status=400, code=None, **extra):
    payload = {
        "status": "error",
        "error": message,
        "message": message,
        "code": code or status,
    }
    payload.update(extra)
    return jsonify(payload), status


def validation_error_response(errors):
    fields = [".".join(str(p) for p in err.get("loc", ())) for err in errors]
    message = "Invalid request: " + ", ".join(f for f in fields if f) if fields else "Invalid request"
    return error(message, status=400, details=errors)


def internal_error_response():
    return error("An unexpected error occurred, please try again later", status=500)
