"""
Read-only HTTP surface over the artifact graph.

Serves node lookups, reverse-reference queries and impact analysis for
reporting front-ends. The graph is built lazily on the first request from
the snapshot named by ARTIFACT_GRAPH_SNAPSHOT, unless a factory is passed
to ``create_app``.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from ..artifacts.base import ArtifactNode
from ..config import GraphSettings, configure_logging
from ..core.errors import ArtifactGraphError, ArtifactNotFoundError
from ..core.identity import ArtifactKind
from ..core.relations import ReverseRelation
from ..graph.factory import ArtifactFactory
from ..graph.query import ArtifactGraphQuery

logger = logging.getLogger(__name__)


class ImpactRequest(BaseModel):
    kind: str
    unique_id: str
    relations: Optional[List[str]] = None


def _parse_kind(kind: str) -> ArtifactKind:
    try:
        return ArtifactKind(kind)
    except ValueError:
        supported = ", ".join(k.value for k in ArtifactKind)
        raise HTTPException(status_code=400, detail=f"Unknown artifact kind '{kind}'. Supported: {supported}")


def _parse_relation(relation: str) -> ReverseRelation:
    try:
        return ReverseRelation(relation)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown relation '{relation}'")


def _summary(node: ArtifactNode) -> Dict[str, Any]:
    return {
        "kind": node.kind_tag,
        "unique_id": node.unique_id,
        "display_name": node.display_name,
        "display_type": node.display_type,
    }


def create_app(factory: Optional[ArtifactFactory] = None,
               settings: Optional[GraphSettings] = None) -> FastAPI:
    """
    Create the API around ``factory`` (or one built from settings on first use).

    Without explicit settings, they are read from the environment and
    ARTIFACT_GRAPH_LOG_LEVEL is applied to the root logger.
    """
    if settings is None:
        settings = GraphSettings.from_env()
        configure_logging(settings.log_level)

    app = FastAPI(
        title="Artifact Graph",
        description="Dependency graph and impact analysis for web-application configuration artifacts",
        version="1.0.0",
    )

    state: Dict[str, Any] = {"factory": factory, "query": None}
    # Endpoints run in a threadpool; the graph is built once
    state_lock = threading.Lock()

    def get_query() -> ArtifactGraphQuery:
        with state_lock:
            if state["query"] is None:
                if state["factory"] is None:
                    state["factory"] = ArtifactFactory.from_settings(settings)
                    count = state["factory"].build_all()
                    logger.info("Built artifact graph with %d nodes", count)
                state["query"] = ArtifactGraphQuery(state["factory"], settings.graph_store_backend)
            return state["query"]

    def lookup(kind: ArtifactKind, unique_id: str) -> ArtifactNode:
        try:
            return get_query().by_unique_id(kind, unique_id)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except ArtifactNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ArtifactGraphError as e:
            raise HTTPException(status_code=422, detail=str(e))

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/stats")
    def stats():
        return get_query().get_statistics()

    @app.get("/artifacts/{kind}")
    def get_artifact(kind: str, location: str = Query(...), name: str = Query(...)):
        artifact_kind = _parse_kind(kind)
        try:
            node = get_query().node(artifact_kind, location, name)
        except ArtifactNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ArtifactGraphError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return get_query().describe(node)

    @app.get("/artifacts/{kind}/by-id")
    def get_artifact_by_id(kind: str, unique_id: str = Query(...)):
        node = lookup(_parse_kind(kind), unique_id)
        return get_query().describe(node)

    @app.get("/reverse/{relation}")
    def get_reverse_edges(relation: str, target: str = Query(...)):
        reverse_relation = _parse_relation(relation)
        referrers = sorted(get_query().reverse_edges(reverse_relation, target))
        return {
            "relation": reverse_relation.value,
            "target": target,
            "referrers": [_summary(node) for node in referrers],
        }

    @app.get("/search")
    def search(q: str = Query(..., min_length=1)) -> List[Dict[str, Any]]:
        return [_summary(node) for node in get_query().search(q)]

    @app.post("/impact")
    def impact(request: ImpactRequest):
        node = lookup(_parse_kind(request.kind), request.unique_id)
        relations = [_parse_relation(r) for r in request.relations] if request.relations is not None else None
        return get_query().impact(node, relations=relations).to_dict()

    return app


app = create_app()
