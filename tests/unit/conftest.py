# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供与原始请求场景一致的参数声明。
"""

import pytest

from request_params.schemas import ConstraintGroup, FieldSpec, Schema


@pytest.fixture
def index_schema() -> Schema:
    """列表接口: 互斥参数组 + 分页/排序/标签."""
    return Schema.of(
        ConstraintGroup.exactly_one("exclusive_1", "exclusive_2"),
        FieldSpec("page", int, default=1),
        FieldSpec("sort", str, in_=["asc", "desc"], default="asc", transform="downcase"),
        FieldSpec("tags", list),
    )


@pytest.fixture
def edit_schema() -> Schema:
    """编辑接口: 嵌套的 book/author 结构."""
    return Schema.of(
        FieldSpec(
            "book",
            dict,
            required=True,
            schema=[
                FieldSpec("title", str, required=True),
                FieldSpec(
                    "author",
                    dict,
                    schema=[
                        FieldSpec("first_name", str, required=True),
                        FieldSpec("last_name", str, required=True),
                        FieldSpec("age", int, required=True),
                    ],
                ),
                FieldSpec("price", "decimal", required=True),
            ],
        ),
    )
