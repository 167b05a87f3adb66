"""Gunicorn 生产配置

用法:
  gunicorn --config deploy/gunicorn.conf.py pubcache.web.app:app

每个 worker 进程持有独立的包缓存目录，worker 越多冷启动下载越多，
因此默认 worker 数较少，靠线程承载并发。
"""

import os

# ---------- 网络 ----------
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8888")

# ---------- 并发 ----------
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = int(os.getenv("GUNICORN_THREADS", "8"))
worker_class = "gthread"
# 需覆盖 resolve_timeout + fetch_timeout
timeout = 120

# ---------- 日志 ----------
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "-")
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")

# ---------- 进程管理 ----------
graceful_timeout = 30
keepalive = 5
max_requests = 1000
max_requests_jitter = 50
