# tests/integration/conftest.py
"""集成测试 fixtures: 注册了参数校验路由的 Flask 应用."""

import pytest
from flask import Flask, g

from request_params.api.flask_integration import current_params, register_error_handler, validate_request
from request_params.schemas import ConstraintGroup, FieldSpec, Schema


@pytest.fixture
def app() -> Flask:
    app = Flask(__name__)
    app.config["TESTING"] = True
    register_error_handler(app)

    @app.get("/books")
    @validate_request(
        Schema.of(
            ConstraintGroup.exactly_one("exclusive_1", "exclusive_2"),
            FieldSpec("page", int, default=1),
            FieldSpec("sort", str, in_=["asc", "desc"], default="asc", transform="downcase"),
            FieldSpec("tags", list),
        ),
    )
    def index():
        return {"page": g.params["page"], "sort": g.params["sort"], "tags": g.params.get("tags")}

    @app.post("/books")
    @validate_request(
        [
            FieldSpec(
                "book",
                dict,
                required=True,
                schema=[
                    FieldSpec("title", str, required=True),
                    FieldSpec("price", "decimal", required=True),
                ],
            ),
        ],
    )
    def create():
        book = current_params()["book"]
        return {"title": book["title"], "price": str(book["price"])}

    return app


@pytest.fixture
def client(app: Flask):
    return app.test_client()
