# gunicorn.conf.py
# Gunicorn configuration file

import os

# Application factory
wsgi_app = 'app:create_app()'
bind = f"0.0.0.0:{os.environ.get('PORT', '3000')}"

# Logging
accesslog = '-'  # Log to stdout
errorlog = '-'   # Log to stderr
loglevel = 'info'

# Worker configuration: each request runs on its own thread
workers = 1
worker_class = 'gthread'
threads = 8
timeout = 120

# Server mechanics
daemon = False
pidfile = None
umask = 0
user = None
group = None
tmp_upload_dir = None
