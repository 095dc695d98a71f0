"""Shared pytest fixtures for the status board tests.

Provides a controllable clock, a minimal stand-in board for segment level
tests, sample asset/element types and a Flask test client so that test
modules can focus on behaviour rather than boilerplate.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

import pytest

from statusboard import Asset, Board, Element, ElementCondition, PositionedAsset

DATA_DIR = Path(__file__).resolve().parent / "data"


# ---------------------------------------------------------------------------
# Sample domain types
# ---------------------------------------------------------------------------


class Truck(PositionedAsset):
    def __init__(self, id: str, **defaults: Any) -> None:
        defaults.setdefault("fuel", 100)
        super().__init__(id, **defaults)


class Radio(Asset):
    pass


class TruckTile(Element):
    """Goes yellow under 50% fuel and red under 20%."""

    def __init__(self, **params: Any) -> None:
        params.setdefault("asset_class_matcher", "^Truck$")
        super().__init__(**params)
        self._subscription = None
        self.subscribe("paired", self._watch)
        self.subscribe("unpaired", self._unwatch)

    def _watch(self, element, asset) -> None:
        self._subscription = asset.get_attribute("fuel").subscribe("changed", lambda _: self.dirty())

    def _unwatch(self, element, asset) -> None:
        asset.get_attribute("fuel").unsubscribe(self._subscription)
        self._subscription = None

    @property
    def condition(self) -> ElementCondition:
        if self.asset is None:
            return ElementCondition("unknown")
        fuel = self.asset.p("fuel")
        if fuel < 20:
            return ElementCondition("red", message=f"fuel {fuel}%")
        if fuel < 50:
            return ElementCondition("yellow", message=f"fuel {fuel}%")
        return ElementCondition("green")

    @property
    def summary(self) -> str:
        return f"{self}|{self.condition}"


class StubBoard:
    """Just enough board for a segment: builds plain elements."""

    def __init__(self) -> None:
        self.requests: List[Any] = []

    def element_factory(self, source, **params):
        self.requests.append(source)
        element = Element(**params)
        element.dirty()
        return element


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def stub_board() -> StubBoard:
    return StubBoard()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def boundaries() -> dict:
    collection = json.loads((DATA_DIR / "boundaries.geojson").read_text(encoding="utf-8"))
    return {f["properties"]["name"]: f["geometry"] for f in collection["features"]}


@pytest.fixture
def board_config() -> dict:
    return json.loads((DATA_DIR / "board.json").read_text(encoding="utf-8"))


@pytest.fixture
def board(board_config, clock) -> Board:
    return Board(board_config, element_types={"TruckTile": TruckTile}, clock=clock)


@pytest.fixture
def bracer() -> Truck:
    return Truck("bracer", position={"lat": 44.543605166666666, "lon": -123.359397, "alt": 86.9})


@pytest.fixture
def smokey() -> Truck:
    return Truck("smokey", position={"lat": 44.5427685, "lon": -123.37945066666667, "alt": 96.1})


@pytest.fixture
def app(board):
    from flask import Flask

    from statusboard.api import create_blueprint

    flask_app = Flask(__name__)
    flask_app.config["TESTING"] = True
    flask_app.register_blueprint(create_blueprint(board, base_url="/api"), url_prefix="/api")
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
