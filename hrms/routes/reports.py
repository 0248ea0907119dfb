# hrms/routes/reports.py
from __future__ import annotations

import io
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request, send_file

from hrms.logger import logger
from hrms.reports.errors import (
    MissingReference,
    NotFound,
    RetrievalError,
    UnknownHandler,
    UnknownReport,
    ValidationError,
)
from hrms.reports.handlers import BinaryResult
from hrms.reports.registry import list_definitions
from hrms.reports.service import build_report_context, generate_report

reports_bp = Blueprint("reports", __name__)


def _error(message: str, status: int, **extra: Any):
    body: Dict[str, Any] = {"error": message}
    body.update(extra)
    return jsonify(body), status


@reports_bp.get("/reports")
def reports():
    category = request.args.get("category") or None
    items = [d.to_dict() for d in list_definitions(category)]
    logger.info(f"/reports listed {len(items)} definitions category={category or '—'}")
    return jsonify(items)


@reports_bp.post("/reports/<report_id>")
async def generate(report_id: str):
    user_email = request.headers.get("X-User-Email") or None
    if request.is_json:
        params = request.get_json(silent=True)
        if not isinstance(params, dict):
            params = {}
    else:
        params = request.form.to_dict()

    ctx = build_report_context(user_email=user_email)
    source = current_app.extensions["hrms.source"]
    handlers = current_app.extensions["hrms.report_handlers"]

    try:
        logger.info(f"[{report_id}] Generating report user={user_email or '—'}")
        result = await generate_report(report_id, params, ctx, source, handlers=handlers)

    except UnknownReport as e:
        logger.warning(f"[{report_id}] Unknown report requested: {e}")
        return _error("Unknown report type.", 404)

    except ValidationError as e:
        logger.warning(f"[{report_id}] Invalid parameters: {e}")
        return _error(str(e), 400, field=e.field)

    except MissingReference as e:
        logger.warning(f"[{report_id}] {e}")
        return _error(str(e), 400, field=e.key)

    except NotFound as e:
        logger.warning(f"[{report_id}] {e}")
        return _error(str(e), 404)

    except RetrievalError as e:
        logger.error(f"[{report_id}] Retrieval failed: {e} (cause: {e.cause!r})")
        return _error("Could not retrieve the stored file.", 502)

    except UnknownHandler as e:
        logger.critical(f"[{report_id}] Internal report configuration error: {e}")
        return _error("Report is misconfigured.", 500)

    if isinstance(result, BinaryResult):
        mimetype = result.content_type
    else:
        mimetype = result.media_type

    logger.info(f"[{report_id}] Report generated OK: {result.filename} ({len(result.content)} bytes)")
    return send_file(
        io.BytesIO(result.content),
        mimetype=mimetype,
        as_attachment=True,
        download_name=result.filename,
    )
