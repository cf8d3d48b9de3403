"""Proxy configuration.

Design:
- Built once at startup by load_config() and handed to the handler explicitly.
- proxy.yaml supplies defaults; environment variables override them.
- A missing credential does not fail construction. The handler calls
  require_api_key() before the upstream call so the problem surfaces as a 500
  with a clear message instead of an import-time crash of the host function.

Environment:
- GEMINI_API_KEY           upstream credential (name configurable via api_key_env)
- CHATPROXY_CONFIG         alternative YAML file
- CHATPROXY_MODEL          model identifier
- CHATPROXY_TIMEOUT        upstream timeout in seconds
- CHATPROXY_API_BASE       upstream base URL
- CHATPROXY_CORS_ORIGIN    value of Access-Control-Allow-Origin
"""
from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import MissingCredentialError
from .logging_util import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "configs" / "proxy.yaml"

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_EMPTY_RESULT_TEXT = "ไม่พบผลลัพธ์ หรือถูกบล็อกโดยนโยบายความปลอดภัย"

def sanitize_api_key(raw: str) -> str:
    """Strip whitespace and quotes pasted in by accident (plain and smart quotes)."""
    k = (raw or "").strip()
    k = k.strip(' "\'`')
    k = k.strip("“”‘’")
    return k

def key_fingerprint(key: str) -> str:
    return hashlib.sha256(key.encode("utf-8")).hexdigest()[:8]

def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("Config file not found, using built-in defaults: %s", path)
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load YAML: %s (%s)", path, e)
        return {}
    if not isinstance(data, dict):
        logger.error("Config file is not a mapping: %s", path)
        return {}
    return data

def _to_float(v: Any, default: float) -> float:
    if v is None or v == "":
        return default
    try:
        return float(v)
    except (TypeError, ValueError):
        logger.warning("Invalid timeout value %r, using %s", v, default)
        return default

@dataclass(frozen=True)
class ProxyConfig:
    api_key: str = ""
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    timeout: float = 30.0
    api_key_env: str = "GEMINI_API_KEY"
    cors_origin: str = "*"
    empty_result_text: str = DEFAULT_EMPTY_RESULT_TEXT

    def require_api_key(self) -> str:
        if not self.api_key:
            raise MissingCredentialError(f"{self.api_key_env} environment variable not set.")
        return self.api_key

def load_config(
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[Path] = None,
) -> ProxyConfig:
    env = os.environ if environ is None else environ

    if config_path is None:
        override = (env.get("CHATPROXY_CONFIG") or "").strip()
        config_path = Path(override) if override else DEFAULT_CONFIG_PATH

    file_cfg = _load_yaml(Path(config_path))

    def pick(env_key: str, file_key: str, default: str) -> str:
        v = (env.get(env_key) or "").strip()
        if v:
            return v
        fv = file_cfg.get(file_key)
        if fv is None or str(fv).strip() == "":
            return default
        return str(fv).strip()

    api_key_env = str(file_cfg.get("api_key_env") or "GEMINI_API_KEY").strip()
    api_key = sanitize_api_key(env.get(api_key_env) or "")

    cfg = ProxyConfig(
        api_key=api_key,
        model=pick("CHATPROXY_MODEL", "model", DEFAULT_MODEL),
        api_base=pick("CHATPROXY_API_BASE", "api_base", DEFAULT_API_BASE).rstrip("/"),
        timeout=_to_float(env.get("CHATPROXY_TIMEOUT") or file_cfg.get("timeout"), 30.0),
        api_key_env=api_key_env,
        cors_origin=pick("CHATPROXY_CORS_ORIGIN", "cors_origin", "*"),
        empty_result_text=str(file_cfg.get("empty_result_text") or DEFAULT_EMPTY_RESULT_TEXT),
    )

    if api_key:
        logger.debug("[API_KEY] env=%s len=%d sha8=%s", api_key_env, len(api_key), key_fingerprint(api_key))
    else:
        logger.warning("%s is not set; requests will fail with 500 until it is configured", api_key_env)

    return cfg
