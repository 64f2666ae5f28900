"""API 骨架：统一响应封装、示例接口与自动生成的接口文档。"""

__version__ = "1.0.0"
