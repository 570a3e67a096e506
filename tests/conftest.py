import os
import time
import pytest
import service1
from enum import Enum
from wsgiref.validate import validator

from contextlib import contextmanager, redirect_stderr, redirect_stdout
from multiprocessing import Process, set_start_method

HOST = "127.0.0.1"
PORT = 3100


class ServerProcess:
    def __init__(self, application, host=HOST, port=PORT) -> None:
        self.process = Process(target=service1.run, args=(application, host, port))
        self.endpoint = f"http://{host}:{port}"
        self.host = host
        self.port = port

    def start(self):
        self.process.start()

    def kill(self):
        self.process.kill()


class Servers(Enum):
    SERVICE1_SERVER = 1
    VALIDATOR_TEST_SERVER = 2


servers = {
    Servers.SERVICE1_SERVER: service1.app,
    Servers.VALIDATOR_TEST_SERVER: validator(service1.app),
}


@contextmanager
def mute_output():
    with open(os.devnull, "w") as devnull:
        with redirect_stdout(devnull), redirect_stderr(devnull):
            yield


def pytest_sessionstart(session):
    set_start_method("fork", force=True)
    for i, server in enumerate(servers.items()):
        with mute_output():
            name, app = server
            server_process = ServerProcess(app, port=PORT + i)
            server_process.start()
        print(f"{name} is listening on port={PORT+i}")
        servers[name] = server_process
    time.sleep(1)  # Allow servers to start up


def pytest_sessionfinish(session, exitstatus):
    for server_process in servers.values():
        server_process.kill()


@pytest.fixture
def service_server():
    return servers.get(Servers.SERVICE1_SERVER)


@pytest.fixture
def validator_test_server():
    return servers.get(Servers.VALIDATOR_TEST_SERVER)


@pytest.fixture
def client():
    return service1.app.test_client()


@pytest.fixture
def fresh_server():
    srv = service1._Server()
    yield srv
    srv.close()
