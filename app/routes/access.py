from flask import Blueprint, current_app, request
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.schemas.access import AccessRequestCreate
from app.services import access_requests
from app.utils import ok, validate_schema

access_bp = Blueprint("access", __name__, url_prefix=API_PREFIX)


@access_bp.route("/access-requests", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["ACCESS_REQUEST_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many access requests from this IP",
)
@validate_schema(AccessRequestCreate)
def submit_access_request():
    data = request.validated_data
    req = access_requests.submit_request(data.email, data.full_name, data.reason)
    return ok(req.to_dict(), message="Access request submitted", status=201)
