"""Shared JSONL serialization for content nodes.

This module centralizes ContentNode JSON serialization logic.
It is reused by the node store for flushing and reloading the graph.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.types import ContentNode


def node_to_payload(node: ContentNode) -> dict[str, object]:
    """Serialize a node into a JSON-safe payload.

    Args:
        node: Content node instance.

    Returns:
        Dictionary payload for JSON encoding.
    """
    return {
        "id": node.id,
        "parent": node.parent,
        "children": list(node.children),
        "fields": dict(node.fields),
        "data": dict(node.data),
        "internal": {
            "type": node.node_type,
            "content": node.content,
            "contentDigest": node.content_digest,
        },
    }


def node_from_payload(payload: dict[str, Any]) -> ContentNode:
    """Deserialize a JSON payload into a node.

    Args:
        payload: Serialized node payload.

    Returns:
        Parsed ContentNode.
    """
    internal_payload = payload.get("internal")
    internal = internal_payload if isinstance(internal_payload, dict) else {}
    parent = payload.get("parent")
    return ContentNode(
        id=str(payload.get("id", "")),
        node_type=str(internal.get("type", "")),
        data=dict(payload.get("data") or {}),
        content=str(internal.get("content", "")),
        content_digest=str(internal.get("contentDigest", "")),
        parent=str(parent) if parent is not None else None,
        children=[str(child) for child in payload.get("children") or []],
        fields={str(key): str(value) for key, value in dict(payload.get("fields") or {}).items()},
    )


def write_nodes_jsonl(nodes_path: Path, nodes: list[ContentNode]) -> None:
    """Write nodes to a JSONL file, one node per line.

    Args:
        nodes_path: Output JSONL file path.
        nodes: Nodes to serialize.
    """
    lines = [json.dumps(node_to_payload(node), sort_keys=True) for node in nodes]
    body = "\n".join(lines) + "\n" if lines else ""
    nodes_path.write_text(body, encoding="utf-8")


def read_nodes_jsonl(nodes_path: Path) -> list[ContentNode]:
    """Read nodes from a JSONL file.

    Args:
        nodes_path: Input JSONL file path.

    Returns:
        Parsed nodes in file order.

    Raises:
        ValueError: If JSONL rows are invalid.
    """
    parsed_nodes: list[ContentNode] = []
    for line_number, line in enumerate(nodes_path.read_text(encoding="utf-8").splitlines(), 1):
        if not line.strip():
            continue
        payload = _parse_payload_line(line, line_number)
        parsed_nodes.append(node_from_payload(payload))
    return parsed_nodes


def _parse_payload_line(line: str, line_number: int) -> dict[str, Any]:
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as error:
        raise ValueError(f"Invalid JSON at line {line_number}: {error.msg}") from error
    if not isinstance(payload, dict):
        raise ValueError(f"Invalid payload at line {line_number}: expected JSON object")
    return payload
