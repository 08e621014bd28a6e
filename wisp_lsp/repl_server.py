from __future__ import annotations

"""
Simple TCP REPL server for Wisp.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(do ...)"}
- Response: {"ok": true, "result": <debug rendering>} or {"ok": false, "error": <description>}

A single Interpreter is kept alive so definitions persist across evaluations.
Requests are evaluated one at a time; the interpreter is never used from two
threads at once.
"""

import json
import logging
import socket
import threading
from typing import Tuple

from wisp.errors import WispError
from wisp.interpreter import Interpreter
from wisp.types.value import debug


HOST = "127.0.0.1"
PORT = 8765


class ReplServer:
    def __init__(self, host: str = HOST, port: int = PORT):
        self._logger = logging.getLogger("ReplServer")
        self.host = host
        self.port = port
        # Keep a single interpreter to maintain session state
        self.interp = Interpreter()
        self._lock = threading.Lock()

    def handle_request(self, line: bytes) -> dict:
        """Decode one request line and evaluate it, returning the response object."""
        try:
            req = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as ex:
            return {"ok": False, "error": f"Invalid request: {ex}"}
        if not isinstance(req, dict) or req.get("cmd") != "eval":
            cmd = req.get("cmd") if isinstance(req, dict) else None
            return {"ok": False, "error": f"Unknown cmd: {cmd}"}

        code = req.get("code", "")
        with self._lock:
            try:
                result = self.interp.eval(code)
            except WispError as ex:
                return {"ok": False, "error": ex.description()}
            except RecursionError:
                return {"ok": False, "error": "error: maximum recursion depth exceeded"}
        return {"ok": True, "result": debug(result)}

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            self._logger.info("listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        self._logger.debug("client connected: %s:%d", *addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = self.handle_request(line)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))


if __name__ == "__main__":
    ReplServer().serve_forever()
