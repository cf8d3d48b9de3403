import json

import cli
from src.chatproxy.types import Success


def test_cli_runs_one_request(make_proxy, monkeypatch, capsys, tmp_path):
    proxy, stub = make_proxy(Success(text="hello"))
    monkeypatch.setattr(cli, "ChatProxy", lambda: proxy)

    req = tmp_path / "req.json"
    req.write_text(json.dumps({"query": "hi"}), encoding="utf-8")

    code = cli.main([f"@{req}"])
    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert out["statusCode"] == 200
    assert out["body"] == {"text": "hello"}


def test_cli_nonzero_exit_on_rejection(make_proxy, monkeypatch, capsys):
    proxy, stub = make_proxy()
    monkeypatch.setattr(cli, "ChatProxy", lambda: proxy)

    code = cli.main(['{"query": "hi"}', "--method", "GET"])
    out = json.loads(capsys.readouterr().out)
    assert code == 1
    assert out["statusCode"] == 405
    assert stub.calls == []
