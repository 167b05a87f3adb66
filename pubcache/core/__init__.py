"""核心层 - 配置、异常、数据模型、包解析与缓存"""
