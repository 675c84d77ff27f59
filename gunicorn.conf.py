"""Gunicorn configuration for the Auvora API.

Run from the repository root: ``gunicorn -c gunicorn.conf.py``.
"""
import multiprocessing
import os

wsgi_app = "auvora.main:app"
pythonpath = "backend"

bind = os.getenv("BIND", "0.0.0.0:8000")
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

# CSV uploads are parsed and imported inside the request.
timeout = 300
graceful_timeout = 30
keepalive = 5
max_requests = 1000
max_requests_jitter = 100

# The app configures JSON logging itself; gunicorn only writes its own logs.
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info")
