"""Runs the stdio server as a subprocess and checks interrupt handling."""

import json
import os
import signal
import subprocess
import sys
from pathlib import Path

import pytest

SERVER_SCRIPT = Path(__file__).resolve().parents[1] / "mcp_file_search_server.py"

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals only")


def _start_server(tmp_path):
    env = dict(os.environ, FILE_SEARCH_LOG_LEVEL="INFO")
    proc = subprocess.Popen(
        [sys.executable, str(SERVER_SCRIPT)],
        cwd=tmp_path,
        env=env,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    for line in proc.stderr:
        if "running on stdio" in line:
            return proc
    proc.kill()
    pytest.fail("server exited before it started serving")


def _initialize(proc):
    request = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "initialize",
        "params": {
            "protocolVersion": "2024-11-05",
            "capabilities": {},
            "clientInfo": {"name": "tests", "version": "0.0.0"},
        },
    }
    proc.stdin.write(json.dumps(request) + "\n")
    proc.stdin.flush()
    return json.loads(proc.stdout.readline())


@pytest.mark.parametrize("signum", [signal.SIGINT, signal.SIGTERM])
def test_interrupt_exits_cleanly_with_stdin_open(tmp_path, signum):
    proc = _start_server(tmp_path)
    try:
        response = _initialize(proc)
        assert response["id"] == 1
        assert response["result"]["serverInfo"]["name"] == "file-search-server"

        proc.send_signal(signum)
        assert proc.wait(timeout=10) == 0
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()
        for stream in (proc.stdin, proc.stdout, proc.stderr):
            stream.close()
