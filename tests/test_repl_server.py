import json

from wisp_lsp.repl_server import ReplServer


def request(server, payload):
    return server.handle_request(json.dumps(payload).encode("utf-8"))


def test_eval_keeps_session_state():
    server = ReplServer()
    assert request(server, {"cmd": "eval", "code": "(define x 20)"}) == {"ok": True, "result": "20"}
    assert request(server, {"cmd": "eval", "code": "(list x \"s\")"}) == {"ok": True, "result": '(20 "s")'}


def test_eval_errors_are_described():
    resp = request(ReplServer(), {"cmd": "eval", "code": "(nope)"})
    assert resp["ok"] is False
    assert resp["error"].startswith("error: the expression `nope`")


def test_empty_code_is_unit():
    assert request(ReplServer(), {"cmd": "eval"}) == {"ok": True, "result": "@"}


def test_unknown_command():
    assert request(ReplServer(), {"cmd": "stop"}) == {"ok": False, "error": "Unknown cmd: stop"}
    assert request(ReplServer(), [1, 2]) == {"ok": False, "error": "Unknown cmd: None"}


def test_invalid_json():
    resp = ReplServer().handle_request(b"{not json")
    assert resp["ok"] is False
    assert resp["error"].startswith("Invalid request:")
