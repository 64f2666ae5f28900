"""v1 接口的请求与响应模型。"""
