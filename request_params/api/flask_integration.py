"""Flask 宿主适配.

目标:
- 将已解码的请求参数(JSON dict 或 Werkzeug MultiDict)组装为参数树,交给校验引擎.
- 将 InvalidParameterError 统一转换为 400 JSON 响应.

注意:
- 本模块只负责 "取参形状",不解析 `a[b][c]` 形式的嵌套 key,也不做任何业务校验.
- 校验通过后的参数树挂在 `flask.g.params` 上,视图函数直接读取.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import wraps
from typing import TYPE_CHECKING, ParamSpec, TypeVar

from flask import Flask, g, jsonify, request

from request_params.api.error_mapping import build_error_payload, map_exception_to_status
from request_params.core.exceptions import InvalidParameterError
from request_params.services.param_validator import validate
from request_params.utils.structlog_config import log_warning

if TYPE_CHECKING:
    from flask import Request, Response
    from werkzeug.datastructures import MultiDict

    from request_params.core.types.structures import ParameterTree
    from request_params.schemas.base import Schema
    from request_params.settings import Settings

P = ParamSpec("P")
R = TypeVar("R")


def _flatten_multidict(multi_dict: MultiDict[str, str]) -> ParameterTree:
    """单值输出为字符串,多值输出为列表."""
    flattened: ParameterTree = {}
    for key in multi_dict.keys():
        values = multi_dict.getlist(key)
        if not values:
            flattened[key] = None
        elif len(values) == 1:
            flattened[key] = values[0]
        else:
            flattened[key] = list(values)
    return flattened


def tree_from_request(req: Request | None = None) -> ParameterTree:
    """从当前请求组装参数树.

    query 参数先写入,JSON body(对象)或表单字段随后覆盖同名 key.

    Args:
        req: 可选的请求对象,缺省时使用当前请求上下文.

    Returns:
        ParameterTree: 新建的参数树,调用方独占.

    """
    current = req if req is not None else request
    tree = _flatten_multidict(current.args)
    if current.is_json:
        body = current.get_json(silent=True)
        if isinstance(body, Mapping):
            tree.update(body)
        return tree
    tree.update(_flatten_multidict(current.form))
    return tree


def validate_request(
    schema: Schema | list[object] | tuple[object, ...],
    *,
    settings: Settings | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """视图装饰器: 校验请求参数并挂载到 `g.params`.

    Example:
        >>> @app.get("/books")
        ... @validate_request(Schema.of(FieldSpec("page", int, default=1)))
        ... def index():
        ...     return {"page": g.params["page"]}

    """

    def decorator(view: Callable[P, R]) -> Callable[P, R]:
        @wraps(view)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            tree = tree_from_request()
            g.params = validate(tree, schema, settings=settings)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_params() -> ParameterTree:
    """返回当前请求已校验的参数树,未经过 `validate_request` 时返回空字典."""
    return g.get("params", {})


def handle_invalid_parameter(error: InvalidParameterError) -> tuple[Response, int]:
    """将参数错误转换为 JSON 响应."""
    status = map_exception_to_status(error)
    log_warning(
        "请求参数校验失败",
        module="flask_integration",
        param=error.param,
        path=".".join(error.path),
        message_key=error.message_key,
        request_path=request.path,
        request_method=request.method,
    )
    return jsonify(build_error_payload(error)), status


def register_error_handler(app: Flask) -> Flask:
    """为 Flask 应用注册 InvalidParameterError 处理器."""
    app.register_error_handler(InvalidParameterError, handle_invalid_parameter)
    return app
