"""工具模块: 类型转换、值渲染、转换函数与日志."""
