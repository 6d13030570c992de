"""共享类型别名."""

from request_params.core.types.structures import (
    JsonValue,
    LoggerExtra,
    OptionMap,
    ParameterTree,
    ParamPath,
    RawKind,
    StructlogEventDict,
    classify_raw,
)

__all__ = [
    "JsonValue",
    "LoggerExtra",
    "OptionMap",
    "ParamPath",
    "ParameterTree",
    "RawKind",
    "StructlogEventDict",
    "classify_raw",
]
