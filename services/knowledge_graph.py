# File: services/knowledge_graph.py
import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


class GraphNode(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    label: Optional[str] = ""
    type: Optional[str] = ""


class GraphEdge(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    source: str
    target: str
    relationship: str = "RELATED_TO"


class KnowledgeGraph(BaseModel):
    model_config = ConfigDict(extra="allow")

    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)
    summary: str = ""


def _candidate_payloads(text: str) -> List[str]:
    payloads = [m.group(1) for m in _JSON_FENCE.finditer(text)]

    # Bare object with no code fence
    first, last = text.find("{"), text.rfind("}")
    if first != -1 and last > first:
        payloads.append(text[first:last + 1])
    return payloads


def extract_knowledge_graph(text: str) -> Optional[Dict[str, Any]]:
    """
    Returns the validated {nodes, edges, summary} object embedded in a
    knowledge-graph section, or None when the section is plain narrative.
    """
    if not text:
        return None

    for payload in _candidate_payloads(text):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError:
            continue
        if not isinstance(data, dict) or not ("nodes" in data or "edges" in data):
            continue
        try:
            return KnowledgeGraph.model_validate(data).model_dump()
        except ValidationError as e:
            logger.warning(f"Knowledge graph JSON failed validation: {e.error_count()} error(s)")

    return None
