"""通用工具 - 日志、子进程、网络、YAML 读写"""
