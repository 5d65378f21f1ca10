# Spin up the FastAPI app with a real uvicorn server for the HTTP tests.

import logging
import os
import socket
import subprocess
import sys
import time
from collections.abc import Iterator
from contextlib import closing
from pathlib import Path

import pytest
import requests

ROOT = Path(__file__).resolve().parents[2]
logger = logging.getLogger(__name__)


def _get_free_port(host: str = "127.0.0.1") -> int:
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return s.getsockname()[1]


@pytest.fixture(scope="session")
def base_url() -> Iterator[str]:
    """
    Base URL of a running API.

    Set BASE_URL to test against an already running instance; otherwise a
    uvicorn process is started on a free port for the test session.
    """
    env_url = os.getenv("BASE_URL")
    if env_url:
        logger.info("[tests] Using existing API instance at %s", env_url)
        yield env_url
        return

    env = os.environ.copy()
    env.setdefault("MAX_GAMES", "200")
    env.setdefault("TAFL_LOG_LEVEL", "WARNING")
    port = _get_free_port()
    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "tafl.app:app",
        "--host",
        "127.0.0.1",
        "--port",
        str(port),
        "--log-level",
        "warning",
    ]
    proc = subprocess.Popen(
        cmd,
        cwd=str(ROOT),
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    logger.info("[tests] Started uvicorn (pid=%s) on port %s", proc.pid, port)

    url = f"http://127.0.0.1:{port}"
    for _ in range(120):
        try:
            r = requests.get(url + "/health", timeout=1.0)
            if r.status_code == 200:
                break
        except requests.RequestException:
            pass
        # If process died early, surface logs
        if proc.poll() is not None:
            out, err = proc.communicate(timeout=2)
            raise RuntimeError(
                f"Server exited early (code={proc.returncode}). STDOUT:\n{out}\nSTDERR:\n{err}"
            )
        time.sleep(0.25)
    else:
        proc.terminate()
        try:
            out, err = proc.communicate(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
            out, err = ("", "")
        raise RuntimeError(f"Server did not start in time. STDOUT:\n{out}\nSTDERR:\n{err}")

    try:
        yield url
    finally:
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
