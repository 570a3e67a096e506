import sys
import logging
from importlib.metadata import version as dist_version

import click
import waitress
from flask import Flask, request

LL_DISABLED    = 0
LL_FATAL_ERROR = 1
LL_CRIT_ERROR  = 2
LL_ERROR       = 3
LL_WARNING     = 4
LL_NOTICE      = 5
LL_INFO        = 6
LL_DEBUG       = 7
LL_TRACE       = 8

LOG_LEVELS = {
    LL_DISABLED:    logging.CRITICAL + 10,
    LL_FATAL_ERROR: logging.CRITICAL,
    LL_CRIT_ERROR:  logging.CRITICAL,
    LL_ERROR:       logging.ERROR,
    LL_WARNING:     logging.WARNING,
    LL_NOTICE:      logging.INFO,
    LL_INFO:        logging.INFO,
    LL_DEBUG:       logging.DEBUG,
    LL_TRACE:       logging.DEBUG,
}

GREETING = "Hello from Node.js Service!"

log = logging.getLogger("service1")

app = Flask(__name__)


@app.get("/")
def hello():
    return GREETING, 200


@app.after_request
def log_request(response):
    log.debug("%s %s %d", request.method, request.path, response.status_code)
    return response

# -------------------------------------------------------------------------------------

def setup_logging(loglevel):
    level = LOG_LEVELS[loglevel]
    for name in ("waitress", "service1"):
        logging.getLogger(name).setLevel(level)
    if loglevel > LL_ERROR:
        logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s: %(message)s")


class _Server():
    def __init__(self):
        self.app = None
        self.host = "0.0.0.0"
        self.port = 3000
        self.backlog = 1024
        self.loglevel = LL_ERROR
        self.threads = 4            # size of the waitress worker pool
        self.wsgi_server = None

    def init(self, app, host = None, port = None, loglevel = None, threads = None):
        self.app = app
        self.host = host if host else self.host
        self.port = port if port is not None else self.port
        self.loglevel = loglevel if loglevel is not None else self.loglevel
        self.threads = threads if threads is not None else self.threads
        setup_logging(self.loglevel)
        # binds immediately; OSError on bind failure, ValueError on a bad host/port
        self.wsgi_server = waitress.create_server(
            self.app,
            host=self.host,
            port=self.port,
            threads=self.threads,
            backlog=self.backlog,
            ident="service1",
        )
        return 0

    @property
    def effective_port(self):
        if self.wsgi_server is None:
            return None
        if hasattr(self.wsgi_server, "effective_port"):
            return self.wsgi_server.effective_port
        # host resolved to several addresses: waitress returns a MultiSocketServer
        return self.wsgi_server.effective_listen[0][1]

    def run(self):
        try:
            self.wsgi_server.run()
        except KeyboardInterrupt:
            log.info("Stopping server")
        finally:
            self.close()
        return 0

    def close(self):
        if self.wsgi_server is not None:
            self.wsgi_server.task_dispatcher.shutdown()
            self.wsgi_server.close()
            self.wsgi_server = None
        return 0

server = _Server()

# -------------------------------------------------------------------------------------

@click.command()
@click.version_option(version=dist_version("service1"), message="%(version)s")
@click.option("--host", help="Host the socket is bound to.", type=str, default=server.host, show_default=True)
@click.option("-p", "--port", help="Port the socket is bound to.", type=int, default=server.port, show_default=True)
@click.option(
    "-l", "--loglevel",
    help="Logging level.",
    type=click.IntRange(LL_DISABLED, LL_TRACE),
    default=server.loglevel,
    show_default=True,
)
@click.option("-t", "--threads", help="Number of worker threads.", type=click.IntRange(min=1), default=server.threads, show_default=True)
def run_from_cli(host, port, loglevel, threads):
    """
    Run Service1 from CLI
    """
    try:
        server.init(app, host, port, loglevel, threads)
    except (OSError, ValueError) as e:
        print(f"Error starting server: {e}")
        sys.exit(1)

    print(f"Service1 running on port {server.effective_port}", flush=True)
    server.run()

# -------------------------------------------------------------------------------------

def run(wsgi_app = app, host = None, port = None, loglevel = None, threads = None):
    server.init(wsgi_app, host, port, loglevel, threads)
    print(f"Service1 running on port {server.effective_port}", flush=True)
    server.run()


if __name__ == "__main__":
    run()
