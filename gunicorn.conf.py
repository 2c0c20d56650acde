"""Gunicorn config for the Emigrant Analytics API."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Each worker loads its own copy of the dataset snapshots; edits write through
# to the shared JSON store, last write wins.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))

timeout = 60
graceful_timeout = 30
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"

wsgi_app = "emigrant_analytics.main:app"
