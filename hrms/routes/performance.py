# hrms/routes/performance.py
# active evaluation period (gates evaluation submissions)
from flask import Blueprint, current_app, jsonify, request

from hrms.logger import logger
from hrms.reports.errors import ValidationError

performance_bp = Blueprint("performance", __name__)


def _store():
    return current_app.extensions["hrms.evaluation_period"]


@performance_bp.get("/performance/active-period")
def get_active_period():
    return jsonify(_store().current.to_dict())


@performance_bp.put("/performance/active-period")
def set_active_period():
    if not request.is_json:
        return jsonify({"error": "Expected a JSON body: {periodStart, periodEnd} or null."}), 400

    # JSON null clears the period
    payload = request.get_json()
    if payload is not None and not isinstance(payload, dict):
        return jsonify({"error": "Expected a JSON object or null."}), 400
    try:
        view = _store().set_active_period(payload)
    except ValidationError as e:
        logger.warning(f"Rejected evaluation period {payload}: {e}")
        return jsonify({"error": str(e), "field": e.field}), 400

    if view.is_active:
        logger.info(f"Evaluation period set to {view.period.period_start} - {view.period.period_end}")
    else:
        logger.info("Evaluation period cleared")
    return jsonify(view.to_dict())


@performance_bp.delete("/performance/active-period")
def clear_active_period():
    view = _store().clear_active_period()
    logger.info("Evaluation period cleared")
    return jsonify(view.to_dict())
