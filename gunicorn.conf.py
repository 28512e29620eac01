"""Gunicorn settings for serving tenant_api.main:app."""

import os

worker_class = "uvicorn.workers.UvicornWorker"

bind = f"{os.getenv('HOST', '0.0.0.0')}:{os.getenv('PORT', '8000')}"
workers = int(os.getenv("WEB_CONCURRENCY", "2"))

# In-flight requests finish (and their change messages go out) before a worker exits.
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "30"))

# Application logs are JSON on stdout; keep gunicorn's own output beside them.
accesslog = "-"
errorlog = "-"
loglevel = "debug" if os.getenv("DEBUG", "").lower() in ("1", "true") else "info"
