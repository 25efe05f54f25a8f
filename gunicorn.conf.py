# Gunicorn configuration for the Caregiver Co-Pilot API
# Run with: gunicorn -c gunicorn.conf.py carecopilot.app:app
import os

# Server socket
bind = f"0.0.0.0:{os.environ.get('PORT', 8000)}"
backlog = 2048

# Worker processes
# Sessions live in process memory, so a session only sticks to one worker.
workers = int(os.environ.get("WEB_CONCURRENCY", 1))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
# A visit makes three sequential LLM calls
timeout = int(os.environ.get("GUNICORN_TIMEOUT", 120))
keepalive = 2

max_requests = 1000
max_requests_jitter = 50

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

proc_name = "caregiver-copilot"

preload_app = True
daemon = False
