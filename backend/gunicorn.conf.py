import os

# Application
wsgi_app = "studiosite:create_app()"

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr; the app emits its own JSON lines
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers (ProxyFix handles X-Forwarded-* inside the app)
forwarded_allow_ips = "*"
proxy_protocol = False
