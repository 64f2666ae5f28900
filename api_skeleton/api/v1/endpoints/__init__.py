"""v1 接口路由定义。"""
