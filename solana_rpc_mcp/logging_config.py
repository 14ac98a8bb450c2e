"""Logging setup shared by the stdio and HTTP transports."""

from __future__ import annotations

import json
import logging
import sys

from solana_rpc_mcp.config import ServerConfig, default_config

_EXTRA_KEYS = ("tool", "request_id", "error", "uri")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in _EXTRA_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(config: ServerConfig = default_config) -> None:
    """
    Configure root logging once per process.

    Output always goes to stderr: stdout carries the stdio protocol stream.
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stderr)
    if config.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=level, handlers=[handler], force=True)
