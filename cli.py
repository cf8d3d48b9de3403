"""Simple CLI: run one request through the proxy.

Usage examples:
- JSON string body:
  python cli.py "{\"query\":\"สวัสดี\",\"isSearch\":false}"

- JSON file body (prefix with @):
  python cli.py @request.json

- Other method / pretty print:
  python cli.py @request.json --method GET --pretty

Notes:
- The body is passed to the core as raw text, exactly as a legacy event would carry it.
- Exit code is 0 for a 200 result, 1 otherwise.
"""
import argparse
import json
import sys
from pathlib import Path

from src.chatproxy.client import ChatProxy
from src.chatproxy.logging_util import get_logger

logger = get_logger(__name__)

def _load_input(spec: str) -> str:
    if spec.startswith("@"):
        p = Path(spec[1:])
        return p.read_text(encoding="utf-8")

    return spec

def main(argv=None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("input", help="JSON string or @path/to/json")
    ap.add_argument("--method", default="POST", help="HTTP method to simulate (default: POST)")
    ap.add_argument("--pretty", action="store_true", help="Pretty print the output JSON")
    args = ap.parse_args(argv)

    try:
        body = _load_input(args.input)
    except OSError as e:
        logger.error("Failed to read input: %s", e)
        return 2

    proxy = ChatProxy()
    out = proxy.handle(args.method, body, request_id="CLI").to_dict()

    if args.pretty:
        print(json.dumps(out, ensure_ascii=False, indent=2))
    else:
        print(json.dumps(out, ensure_ascii=False))

    return 0 if out["statusCode"] == 200 else 1

if __name__ == "__main__":
    raise SystemExit(main())
