"""服务层 - 依赖注入容器"""
