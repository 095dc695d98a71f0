"""JSON:API document helpers for Flask views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flask import Response, jsonify

from ..asset import Asset
from ..element import Element
from ..segment import Segment

JSONAPI_MIMETYPE = "application/vnd.api+json"


@dataclass
class Document:
    data: Dict[str, Any]
    self_link: str
    included: Optional[List[Dict[str, Any]]] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"jsonapi": {"version": "1.0"}, "data": self.data}
        if self.included is not None:
            body["included"] = self.included
        if self.meta:
            body["meta"] = self.meta
        body["links"] = {"self": self.self_link}
        return body

    def response(self, status: int = 200) -> Response:
        resp = jsonify(self.to_dict())
        resp.status_code = status
        resp.mimetype = JSONAPI_MIMETYPE
        return resp


def json_error(message: str, status: int = 400) -> Response:
    resp = jsonify({"jsonapi": {"version": "1.0"}, "errors": [{"status": str(status), "detail": str(message)}]})
    resp.status_code = int(status)
    resp.mimetype = JSONAPI_MIMETYPE
    return resp


def segment_resource(segment: Segment, index: int, base_url: str) -> Dict[str, Any]:
    return {
        "type": "segment",
        "id": str(index),
        "attributes": {
            "name": segment.name,
            "class_name": type(segment).__name__,
            "checksum": segment.checksum,
        },
        "links": {"self": f"{base_url}/board/segment/{index}"},
    }


def element_resource(element: Element, segment_index: int, index: int, base_url: str) -> Dict[str, Any]:
    return {
        "type": type(element).__name__,
        "id": str(index),
        "attributes": {
            "summary": element.summary,
            "static": element.static,
            "condition": element.condition.to_dict(),
            "asset_class": type(element.asset).__name__ if element.asset else None,
        },
        "links": {"self": f"{base_url}/board/segment/{segment_index}/element/{index}"},
    }


def asset_resource(asset: Asset, segment_name: str | None) -> Dict[str, Any]:
    body = asset.to_dict()
    return {
        "type": "asset",
        "id": asset.id,
        "attributes": {
            "class_name": type(asset).__name__,
            "segment": segment_name,
            "attributes": body["attributes"],
        },
    }
