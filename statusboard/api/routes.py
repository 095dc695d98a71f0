"""Flask blueprint exposing a read-only JSON:API view of a board."""

from __future__ import annotations

import logging

from flask import Blueprint, make_response, request
from werkzeug.exceptions import HTTPException

from ..board import Board
from ..errors import ConfigurationError, ValidationError
from . import schemas

LOGGER = logging.getLogger("statusboard.api")

OBJECT_TYPES = {schemas.JSONAPI_MIMETYPE, "application/json", "*/*"}


def _negotiate(header: str | None) -> tuple[str, str] | None:
    accepts = [item.split(";")[0].strip().lower() for item in (header or "application/json").split(",")]
    if any(item in OBJECT_TYPES for item in accepts):
        return "object", schemas.JSONAPI_MIMETYPE
    if "text/plain" in accepts:
        return "text", "text/plain"
    return None


def create_blueprint(board: Board, base_url: str = "") -> Blueprint:
    if not isinstance(board, Board):
        raise ConfigurationError("A valid Board instance must be provided to the board blueprint.")
    bp = Blueprint("statusboard_api", __name__)

    def _segment(segment_id: int):
        segments = board.segments
        if segment_id < 0 or segment_id >= len(segments):
            return None
        return segments[segment_id]

    @bp.route("/board/", methods=["GET"])
    def get_board():
        segments = board.segments
        data = {
            "type": "board",
            "id": board.name,
            "attributes": {"name": board.name, "asset_count": len(board.assets)},
            "relationships": {
                "segments": {
                    "data": [{"type": "segment", "id": str(i)} for i in range(len(segments))]
                }
            },
            "links": {"self": f"{base_url}/board/"},
        }
        included = [
            schemas.segment_resource(segment, index, base_url)
            for index, segment in enumerate(segments)
        ]
        return schemas.Document(data, f"{base_url}/board/", included).response()

    @bp.route("/board/segment/<int:segment_id>", methods=["GET"])
    def get_segment(segment_id: int):
        segment = _segment(segment_id)
        if segment is None:
            return schemas.json_error(f"Segment with ID '{segment_id}' not found.", 404)
        resource = schemas.segment_resource(segment, segment_id, base_url)
        resource["attributes"]["rows"] = segment.rows()
        elements = [
            (index, element) for index, element in enumerate(segment.elements) if element is not None
        ]
        resource["relationships"] = {
            "elements": {
                "data": [{"type": type(element).__name__, "id": str(index)} for index, element in elements]
            }
        }
        included = [
            schemas.element_resource(element, segment_id, index, base_url)
            for index, element in elements
        ]
        return schemas.Document(resource, resource["links"]["self"], included).response()

    @bp.route("/board/segment/<int:segment_id>/element/<int:element_id>", methods=["GET"])
    def get_element(segment_id: int, element_id: int):
        segment = _segment(segment_id)
        if segment is None:
            return schemas.json_error(f"Segment with ID '{segment_id}' not found.", 404)
        elements = segment.elements
        if element_id < 0 or element_id >= len(elements) or elements[element_id] is None:
            return schemas.json_error(
                f"Element with ID '{element_id}' not found in segment '{segment_id}'.", 404
            )
        negotiated = _negotiate(request.headers.get("Accept"))
        if negotiated is None:
            return schemas.json_error(
                f"Unsupported Accept header '{request.headers.get('Accept')}'. "
                "Supported types: application/json, text/plain",
                406,
            )
        fmt, content_type = negotiated
        element = elements[element_id]
        rendered = element.render(fmt)
        self_link = f"{base_url}/board/segment/{segment_id}/element/{element_id}"
        if fmt == "text":
            resp = make_response(rendered, 200)
            resp.mimetype = content_type
            return resp
        data = {
            "type": "element",
            "id": str(element_id),
            "attributes": rendered,
            "links": {"self": self_link},
        }
        return schemas.Document(data, self_link).response()

    @bp.route("/board/asset/<asset_id>", methods=["GET"])
    def get_asset(asset_id: str):
        segment, asset = board.find_asset(asset_id)
        if asset is None:
            return schemas.json_error(f"Asset with ID '{asset_id}' not found", 404)
        data = schemas.asset_resource(asset, segment.name)
        return schemas.Document(data, f"{base_url}/board/asset/{asset_id}").response()

    @bp.errorhandler(ValidationError)
    def handle_validation_error(exc):
        LOGGER.info("Rejected board API request: %s", exc)
        return schemas.json_error(str(exc), 400)

    @bp.errorhandler(Exception)
    def handle_error(exc):
        if isinstance(exc, HTTPException):
            return exc
        LOGGER.exception("Board API request failed: %s", exc)
        return schemas.json_error(str(exc), 500)

    return bp
