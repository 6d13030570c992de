"""参数校验/转换服务.

按 Schema 深度优先遍历调用方持有的参数树,逐字段完成:
参数组检查 -> 必填检查 -> 默认值 -> 类型转换 -> transform -> 值约束 -> 回写 -> 嵌套递归.

说明:
- 参数树被原地修改并原样返回,引擎不做拷贝;需要保留原始数据的调用方应自行 `copy.deepcopy`.
- fail-fast: 遇到第一个不合法字段立即抛出 InvalidParameterError,不聚合错误.
- 引擎不持有跨调用的可变状态,可被多个请求并发调用.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, MutableMapping, MutableSequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from request_params.constants.system_constants import ErrorMessages
from request_params.core.exceptions import InvalidParameterError
from request_params.schemas.base import Schema
from request_params.schemas.field_spec import FieldSpec
from request_params.schemas.groups import ConstraintGroup, GroupMode, any_of_group
from request_params.schemas.param_types import ParamType
from request_params.settings import get_settings
from request_params.utils.coercion import coerce
from request_params.utils.inspection import describe_raw, inspect_value
from request_params.utils.structlog_config import log_debug
from request_params.utils.transforms import apply_transform

if TYPE_CHECKING:
    from request_params.core.types.structures import ParameterTree, ParamPath
    from request_params.settings import Settings

_CUSTOM_VALIDATOR_ERRORS = (ValueError, TypeError)
_MODULE = "param_validator"


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """校验结果: 成功时 error 为 None,失败时携带第一个错误."""

    tree: ParameterTree
    error: InvalidParameterError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ParamValidator:
    """参数树校验器.

    Attributes:
        settings: 类型转换使用的配置.

    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def validate(self, tree: ParameterTree, schema: Schema, *, path: ParamPath = ()) -> ParameterTree:
        """按 schema 校验并原地转换参数树.

        失败时不回滚已回写的字段与数组元素,参数树应视为不可用.

        Args:
            tree: 已解码的请求参数树,会被原地修改.
            schema: 当前层级的声明.
            path: 当前层级在根参数树中的路径.

        Returns:
            ParameterTree: 传入的同一个参数树对象.

        Raises:
            InvalidParameterError: 第一个不满足声明的字段或参数组.
            TypeError: tree 不是可变映射.

        """
        if not isinstance(tree, MutableMapping):
            raise TypeError("parameter tree must be a mutable mapping")
        for group in schema.groups:
            self.check_group(tree, group, path=path)
        for spec in schema.fields:
            self.validate_field(tree, spec.name, spec, path=path)
        return tree

    def check_group(self, tree: Mapping[str, object], group: ConstraintGroup, *, path: ParamPath = ()) -> None:
        """检查互斥/至少一个参数组.

        Raises:
            InvalidParameterError: 多个互斥参数同时出现,或一个都没有出现.

        """
        present = sum(1 for key in group.keys if _lookup(tree, key) is not None)
        if present > 1 and group.mode is GroupMode.EXACTLY_ONE:
            message = ErrorMessages.MUTUALLY_EXCLUSIVE.format(keys=group.label)
            raise self._group_error(message, "MUTUALLY_EXCLUSIVE", group, path)
        if present == 0:
            message = ErrorMessages.AT_LEAST_ONE_REQUIRED.format(keys=group.label)
            raise self._group_error(message, "AT_LEAST_ONE_REQUIRED", group, path)

    def validate_field(
        self,
        container: MutableMapping[str, Any] | MutableSequence[Any],
        key: str | int,
        spec: FieldSpec,
        *,
        path: ParamPath = (),
    ) -> Any:
        """校验单个字段并回写转换后的值.

        Args:
            container: 字段所在的映射(按 key)或列表(按下标).
            key: 字段 key 或数组下标.
            spec: 字段声明.
            path: 容器在根参数树中的路径.

        Returns:
            转换后的值;字段缺失且无默认值时返回 None 且不修改容器.

        """
        field_path = (*path, str(key))
        raw = _get(container, key)
        if raw is None:
            if spec.is_required:
                raise _field_error(
                    ErrorMessages.PARAMETER_REQUIRED.format(name=key),
                    "PARAMETER_REQUIRED",
                    spec,
                    field_path,
                )
            if not spec.declares("default"):
                return None
            raw = spec.resolve_default()
            if raw is None:
                return None

        value = self._coerce(raw, spec, field_path)
        if spec.declares("transform") and value is not None:
            try:
                value = apply_transform(value, spec.transform)
            except InvalidParameterError as exc:
                raise _bind(exc, spec, field_path) from None
        self._check_constraints(value, spec, field_path)
        container[key] = value  # type: ignore[index]

        if spec.schema is not None and isinstance(value, MutableMapping):
            self.validate(value, spec.schema, path=field_path)  # type: ignore[arg-type]
        elif spec.element is not None and isinstance(value, MutableSequence):
            for index in range(len(value)):
                self.validate_field(value, index, spec.element, path=field_path)
        return value

    def _coerce(self, raw: object, spec: FieldSpec, field_path: ParamPath) -> Any:
        try:
            return coerce(
                raw,
                spec.param_type,
                spec.format if spec.param_type.is_temporal and spec.declares("format") else None,
                delimiter=spec.delimiter or None,
                separator=spec.separator or None,
                precision=spec.precision or None,
                settings=self.settings,
            )
        except InvalidParameterError as exc:
            raise _bind(exc, spec, field_path) from None

    def _check_constraints(self, value: Any, spec: FieldSpec, field_path: ParamPath) -> None:
        name = field_path[-1]

        def fail(template: str, message_key: str, **fields: object) -> InvalidParameterError:
            return _field_error(template.format(name=name, **fields), message_key, spec, field_path)

        if spec.blank is False and _is_blank(value):
            raise fail(ErrorMessages.PARAMETER_BLANK, "PARAMETER_BLANK")
        if spec.declares("is_") and value != spec.is_:
            raise fail(ErrorMessages.PARAMETER_IS, "PARAMETER_IS", expected=describe_raw(spec.is_))
        for option in ("in_", "within"):
            if spec.declares(option):
                allowed = getattr(spec, option)
                if not _contains(allowed, value):
                    raise fail(ErrorMessages.PARAMETER_WITHIN, "PARAMETER_WITHIN", allowed=inspect_value(allowed))
        if spec.declares("min") and not _compare(value, spec.min, lower=True):
            raise fail(ErrorMessages.PARAMETER_MIN, "PARAMETER_MIN", limit=describe_raw(spec.min))
        if spec.declares("max") and not _compare(value, spec.max, lower=False):
            raise fail(ErrorMessages.PARAMETER_MAX, "PARAMETER_MAX", limit=describe_raw(spec.max))
        if spec.declares("min_length") and not _length_at_least(value, spec.min_length):
            raise fail(ErrorMessages.PARAMETER_MIN_LENGTH, "PARAMETER_MIN_LENGTH", limit=spec.min_length)
        if spec.declares("max_length") and not _length_at_most(value, spec.max_length):
            raise fail(ErrorMessages.PARAMETER_MAX_LENGTH, "PARAMETER_MAX_LENGTH", limit=spec.max_length)
        if spec.declares("format") and not spec.param_type.is_temporal:
            pattern = spec.format.pattern if isinstance(spec.format, re.Pattern) else str(spec.format)
            if not isinstance(value, str) or re.search(spec.format, value) is None:
                raise fail(ErrorMessages.PARAMETER_FORMAT, "PARAMETER_FORMAT", pattern=pattern)
        if spec.declares("custom"):
            self._run_custom(value, spec, field_path)

    @staticmethod
    def _run_custom(value: Any, spec: FieldSpec, field_path: ParamPath) -> None:
        try:
            result = spec.custom(value)  # type: ignore[operator]
        except InvalidParameterError as exc:
            raise _bind(exc, spec, field_path) from None
        except _CUSTOM_VALIDATOR_ERRORS as exc:
            message = str(exc) or ErrorMessages.PARAMETER_INVALID.format(name=field_path[-1])
            raise _field_error(message, "PARAMETER_INVALID", spec, field_path) from None
        if result is False:
            raise _field_error(
                ErrorMessages.PARAMETER_INVALID.format(name=field_path[-1]),
                "PARAMETER_INVALID",
                spec,
                field_path,
            )

    @staticmethod
    def _group_error(
        message: str,
        message_key: str,
        group: ConstraintGroup,
        path: ParamPath,
    ) -> InvalidParameterError:
        log_debug("参数组校验失败", module=_MODULE, keys=list(group.keys), mode=group.mode.value)
        return InvalidParameterError(
            message,
            param=group.label,
            options=group.options,
            path=(*path, group.label),
            message_key=message_key,
        )


def _field_error(message: str, message_key: str, spec: FieldSpec, field_path: ParamPath) -> InvalidParameterError:
    log_debug("参数校验失败", module=_MODULE, param=field_path[-1], path=".".join(field_path), reason=message_key)
    return InvalidParameterError(
        spec.message if spec.declares("message") else message,
        param=field_path[-1],
        options=spec.options,
        path=field_path,
        message_key=message_key,
    )


def _bind(exc: InvalidParameterError, spec: FieldSpec, field_path: ParamPath) -> InvalidParameterError:
    log_debug(
        "参数校验失败",
        module=_MODULE,
        param=field_path[-1],
        path=".".join(field_path),
        reason=exc.message_key,
    )
    return exc.bind(
        param=field_path[-1],
        options=spec.options,
        path=field_path,
        message=spec.message if spec.declares("message") else None,  # type: ignore[arg-type]
    )


def _get(container: Mapping[str, Any] | MutableSequence[Any], key: str | int) -> Any:
    if isinstance(container, Mapping):
        return container.get(key)
    return container[key]  # type: ignore[index]


def _lookup(tree: Mapping[str, object], key: str) -> object:
    """按 key 取值,key 不存在时按 "a.b.c" 逐层查找."""
    if key in tree:
        return tree[key]
    node: object = tree
    for part in key.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node


def _is_blank(value: object) -> bool:
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Mapping, list, tuple, set)):
        return len(value) == 0
    return value is None


def _contains(allowed: Any, value: object) -> bool:
    try:
        return value in allowed
    except TypeError:
        return False


def _compare(value: Any, limit: Any, *, lower: bool) -> bool:
    try:
        return bool(value >= limit) if lower else bool(value <= limit)
    except TypeError:
        return False


def _length_at_least(value: Any, limit: int) -> bool:
    try:
        return len(value) >= limit
    except TypeError:
        return False


def _length_at_most(value: Any, limit: int) -> bool:
    try:
        return len(value) <= limit
    except TypeError:
        return False


def validate(
    tree: ParameterTree,
    schema: Schema | Iterable[object],
    *,
    settings: Settings | None = None,
) -> ParameterTree:
    """校验并原地转换参数树(fail-fast).

    抛出异常时参数树处于部分转换状态: 已通过的字段已回写,Array 字段沿用原 list 对象,
    出错元素之前的元素已被转换(如 `{"ids": ["1", "x"]}` 失败后为 `{"ids": [1, "x"]}`).
    校验失败后调用方应丢弃该参数树,需要保留原始数据时先自行 `copy.deepcopy`.

    Args:
        tree: 已解码的请求参数树,会被原地修改.
        schema: Schema,或由 FieldSpec/ConstraintGroup 组成的可迭代对象.
        settings: 可选的配置对象.

    Returns:
        ParameterTree: 传入的同一个参数树对象.

    Raises:
        InvalidParameterError: 第一个不满足声明的字段或参数组.

    """
    resolved = schema if isinstance(schema, Schema) else Schema.of(*schema)
    log_debug("开始校验参数", module=_MODULE, fields=list(resolved.names), groups=len(resolved.groups))
    return ParamValidator(settings).validate(tree, resolved)


def check(
    tree: ParameterTree,
    schema: Schema | Iterable[object],
    *,
    settings: Settings | None = None,
) -> ValidationOutcome:
    """校验参数树并以结果对象返回,不抛出 InvalidParameterError."""
    try:
        validate(tree, schema, settings=settings)
    except InvalidParameterError as exc:
        return ValidationOutcome(tree=tree, error=exc)
    return ValidationOutcome(tree=tree)


def param(
    tree: ParameterTree,
    name: str,
    param_type: ParamType | type | str,
    *,
    settings: Settings | None = None,
    **options: Any,
) -> Any:
    """声明并校验单个顶层参数,返回转换后的值.

    Example:
        >>> param(tree, "page", int, default=1)

    """
    spec = FieldSpec(name, param_type, **options)
    if not isinstance(tree, MutableMapping):
        raise TypeError("parameter tree must be a mutable mapping")
    return ParamValidator(settings).validate_field(tree, name, spec)


def any_of(
    tree: ParameterTree,
    keys: Iterable[str],
    mode: GroupMode = GroupMode.EXACTLY_ONE,
    *,
    settings: Settings | None = None,
) -> None:
    """检查一组参数: EXACTLY_ONE 要求恰好一个出现, AT_LEAST_ONE 要求至少一个出现."""
    ParamValidator(settings).check_group(tree, any_of_group(keys, mode))


__all__ = ["ParamValidator", "ValidationOutcome", "any_of", "check", "param", "validate"]
