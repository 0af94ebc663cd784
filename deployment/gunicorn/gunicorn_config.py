import multiprocessing
import os

bind = os.getenv('GUNICORN_BIND', 'unix:/run/vetconnect/gunicorn.sock')
workers = int(os.getenv('GUNICORN_WORKERS', multiprocessing.cpu_count() * 2 + 1))
worker_class = "sync"
worker_tmp_dir = "/dev/shm"
max_requests = 1000
max_requests_jitter = 100
# Broadcasts through a throttled gateway send one SMS per second
timeout = int(os.getenv('GUNICORN_TIMEOUT', 300))
keepalive = 5

# Logging
accesslog = os.getenv('GUNICORN_ACCESS_LOG', '/var/log/vetconnect/access.log')
errorlog = os.getenv('GUNICORN_ERROR_LOG', '/var/log/vetconnect/error.log')
loglevel = os.getenv('GUNICORN_LOG_LEVEL', 'info')
access_log_format = '%(h)s %(u)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

proc_name = "vetconnect-backend"

daemon = False
pidfile = "/run/vetconnect/gunicorn.pid"
umask = 0o007


def when_ready(server):
    server.log.info("VetConnect API ready, spawning %s workers", workers)


def worker_abort(worker):
    worker.log.warning("Worker %s aborted after exceeding the %ss timeout", worker.pid, timeout)
