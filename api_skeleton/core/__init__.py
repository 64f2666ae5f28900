"""核心模块：配置、日志、异常与统一响应。"""
