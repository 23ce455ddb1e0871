"""
Runtime settings for the artifact graph.

Values come from the environment (a local .env file is loaded first):
    ARTIFACT_GRAPH_SNAPSHOT        JSON configuration snapshot to serve
    ARTIFACT_GRAPH_CACHE_FAILURES  cache failed builds (default "true")
    GRAPH_STORE_BACKEND            graph store backend (default "networkx")
    ARTIFACT_GRAPH_LOG_LEVEL       log level (default "WARNING")
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import dotenv

dotenv.load_dotenv()

TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in TRUE_VALUES


@dataclass
class GraphSettings:
    snapshot_path: Optional[str] = None
    cache_failures: bool = True
    graph_store_backend: str = "networkx"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "GraphSettings":
        return cls(
            snapshot_path=os.getenv("ARTIFACT_GRAPH_SNAPSHOT") or None,
            cache_failures=_env_flag("ARTIFACT_GRAPH_CACHE_FAILURES", True),
            graph_store_backend=os.getenv("GRAPH_STORE_BACKEND", "networkx").lower(),
            log_level=os.getenv("ARTIFACT_GRAPH_LOG_LEVEL", "WARNING").upper(),
        )


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for hosts that embed the graph (API, scripts)."""
    level = (level or GraphSettings.from_env().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
