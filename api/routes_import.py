"""
api.routes_import - /api/v1/groups/<group>/import endpoint.

Accepts CSV/TSV via multipart file upload or raw request body.
"""

import logging

from flask import request, jsonify

import config
from api import api_bp
from import_engine import (
    run_import,
    HeaderMismatchError,
    ImportEngineError,
    ImportValidationError,
    SheetFormatError,
)

logger = logging.getLogger(__name__)


@api_bp.route("/groups/<group>/import", methods=["POST"])
def api_import_items(group: str):
    """
    POST /api/v1/groups/{group}/import?auto_asset_id=0|1

    Multipart: field name 'csv_file'
    Or: raw CSV/TSV as request body (Content-Type: text/csv).

    200 {"completed": n}
    400 header or cell format problem, nothing written
    422 some rows failed validation; the others were imported
    500 store failure part-way through
    """
    auto = request.args.get("auto_asset_id")
    auto_increment = config.AUTO_INCREMENT_ASSET_ID if auto is None else auto == "1"

    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("csv_file")
        if not f:
            return jsonify({"error": "no csv_file in upload"}), 400
        content = f.read()
    else:
        content = request.get_data()

    if not content:
        return jsonify({"error": "empty body"}), 400

    try:
        completed = run_import(content, group=group, auto_increment_asset_id=auto_increment)
    except (HeaderMismatchError, SheetFormatError) as exc:
        return jsonify({"error": str(exc)}), 400
    except ImportValidationError as exc:
        return jsonify({"error": "validation failed", **exc.report.to_dict()}), 422
    except ImportEngineError as exc:
        return jsonify({"error": str(exc)}), 500

    return jsonify({"completed": completed})
