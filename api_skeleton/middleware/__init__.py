"""中间件集合。"""
