"""HTTP 边界: 异常映射与 Flask 适配."""

from request_params.api.error_mapping import build_error_payload, map_exception_to_status, to_json_safe

__all__ = ["build_error_payload", "map_exception_to_status", "to_json_safe"]
