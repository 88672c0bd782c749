from flask import Blueprint, current_app
from app.version import API_PREFIX
from app.services.reports import build_report
from app.utils import ok, query_int, role_required

report_bp = Blueprint("report", __name__, url_prefix=API_PREFIX)


@report_bp.route("/reports", methods=["GET"])
@role_required(["member:view_reports", "admin"])
def sales_report():
    report = build_report(
        month=query_int("month"),
        year=query_int("year"),
        tz_name=current_app.config["APP_TIMEZONE"],
    )
    return ok(report)
