"""
api.routes_catalog - Read-back and maintenance endpoints per group.
"""

from flask import jsonify

from api import api_bp
from db import get_session
from services import GroupsService, ItemsService, LabelsService, LocationsService
from services.sequence_service import format_asset_id


@api_bp.route("/groups/<group>/locations/tree")
def location_tree(group: str):
    """GET /api/v1/groups/{group}/locations/tree"""
    session = get_session()
    try:
        grp = GroupsService.get_by_name(session, group)
        if not grp:
            return jsonify({"error": "not found"}), 404
        return jsonify(LocationsService.tree(session, grp.id))
    finally:
        session.close()


@api_bp.route("/groups/<group>/labels")
def list_labels(group: str):
    """GET /api/v1/groups/{group}/labels"""
    session = get_session()
    try:
        grp = GroupsService.get_by_name(session, group)
        if not grp:
            return jsonify({"error": "not found"}), 404
        return jsonify([l.to_dict() for l in LabelsService.get_all(session, grp.id)])
    finally:
        session.close()


@api_bp.route("/groups/<group>/items")
def list_items(group: str):
    """GET /api/v1/groups/{group}/items"""
    session = get_session()
    try:
        grp = GroupsService.get_by_name(session, group)
        if not grp:
            return jsonify({"error": "not found"}), 404
        items = []
        for item in ItemsService.get_all(session, grp.id):
            d = item.to_dict()
            d["asset_id_display"] = format_asset_id(item.asset_id) if item.asset_id else ""
            items.append(d)
        return jsonify({"total": len(items), "items": items})
    finally:
        session.close()


@api_bp.route("/groups/<group>/actions/ensure-asset-ids", methods=["POST"])
def ensure_asset_ids(group: str):
    """POST /api/v1/groups/{group}/actions/ensure-asset-ids"""
    return _run_action(group, ItemsService.ensure_asset_ids)


@api_bp.route("/groups/<group>/actions/ensure-import-refs", methods=["POST"])
def ensure_import_refs(group: str):
    """POST /api/v1/groups/{group}/actions/ensure-import-refs"""
    return _run_action(group, ItemsService.ensure_import_refs)


def _run_action(group: str, action):
    session = get_session()
    try:
        grp = GroupsService.get_or_create(session, group)
        completed = action(session, grp.id)
        session.commit()
        return jsonify({"completed": completed})
    except Exception as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 500
    finally:
        session.close()
