import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

MERMAID_DIRECTIVE_RE = re.compile(r"^(graph|flowchart)\s+(TD|LR|TB|RL|BT)$", re.IGNORECASE)

# Words the flowchart parser treats as keywords when used as bare node ids
RESERVED_IDS = {
    "end", "graph", "flowchart", "subgraph", "class", "classdef",
    "style", "linkstyle", "click", "default", "direction",
}

NODE_LINE_RE = re.compile(r'^\s*(\w+)\["(.*)"\]\s*$')
SUBGRAPH_RE = re.compile(r'^\s*subgraph\s+(\w+)(?:\["(.*)"\])?\s*$')
EDGE_RE = re.compile(r"^\s*(\w+)\s+(-->|-\.->)\|(.*)\|\s+(\w+)\s*$")
CLASS_RE = re.compile(r"^\s*class\s+(\S+)\s+(\w+)\s*$")


def escape_label(text: str) -> str:
    """Make text safe inside a double-quoted node label."""
    return text.replace('"', "#quot;")


def escape_edge_label(text: str) -> str:
    """Make text safe between the pipes of an edge label."""
    text = re.sub(r"\s+", " ", text).strip()
    return text.replace('"', "#quot;").replace("|", "#124;")


def safe_id(raw_id: str) -> str:
    """
    Mermaid-safe node id for an arbitrary identifier.

    Runs of non-word characters become a single underscore:
    `Page(dashboard)` -> `Page_dashboard`, `Page(/)` -> `Page`.
    """
    candidate = re.sub(r"\W+", "_", raw_id, flags=re.ASCII).strip("_")
    if not candidate:
        candidate = "node"
    if candidate.lower() in RESERVED_IDS:
        candidate = f"n_{candidate}"
    return candidate


class NodeIdMapper:
    """Maps raw identifiers to unique Mermaid-safe ids, first come first served."""

    def __init__(self, reserved: Iterable[str] = ()):
        self._map: Dict[str, str] = {}
        # Ids taken by something other than a node, e.g. subgraph blocks
        self._used: set = set(reserved)

    def get(self, raw_id: str) -> str:
        if raw_id not in self._map:
            base = safe_id(raw_id)
            candidate = base
            suffix = 1
            while candidate in self._used:
                suffix += 1
                candidate = f"{base}_{suffix}"
            self._used.add(candidate)
            self._map[raw_id] = candidate
        return self._map[raw_id]


@dataclass
class RenderedDiagram:
    """What a rendered document declares, recovered line by line."""
    directive: str = ""
    nodes: Dict[str, str] = field(default_factory=dict)            # id -> label
    node_cluster: Dict[str, List[str]] = field(default_factory=dict)  # id -> subgraph ids
    node_line: Dict[str, int] = field(default_factory=dict)
    edges: List[Tuple[str, str, str, bool, int]] = field(default_factory=list)
    class_assignments: Dict[str, List[str]] = field(default_factory=dict)  # class -> ids


def parse_rendered(code: str) -> RenderedDiagram:
    """
    Recover the structure of a document produced by render_mermaid.

    Only understands the subset the renderer emits: one statement per line.
    Edges are (source, target, label, is_async, line_number).
    """
    diagram = RenderedDiagram()
    current_cluster = None

    for number, line in enumerate(code.splitlines()):
        stripped = line.strip()
        if not stripped or stripped.startswith("%%"):
            continue
        if not diagram.directive:
            diagram.directive = stripped
            continue

        subgraph = SUBGRAPH_RE.match(stripped)
        if subgraph:
            current_cluster = subgraph.group(1)
            continue
        if stripped == "end":
            current_cluster = None
            continue

        node = NODE_LINE_RE.match(stripped)
        if node:
            node_id = node.group(1)
            diagram.nodes[node_id] = node.group(2)
            diagram.node_line.setdefault(node_id, number)
            if current_cluster:
                diagram.node_cluster.setdefault(node_id, []).append(current_cluster)
            continue

        edge = EDGE_RE.match(stripped)
        if edge:
            diagram.edges.append(
                (edge.group(1), edge.group(4), edge.group(3), edge.group(2) == "-.->", number)
            )
            continue

        assignment = CLASS_RE.match(stripped)
        if assignment:
            ids = [i for i in assignment.group(1).split(",") if i]
            diagram.class_assignments.setdefault(assignment.group(2), []).extend(ids)

    return diagram


def validate_mermaid(code: str) -> bool:
    if not code:
        return False

    lines = [l for l in code.splitlines() if l.strip()]
    if not lines:
        return False

    # First line must be a valid directive like "graph TD"
    if not MERMAID_DIRECTIVE_RE.match(lines[0].strip()):
        return False

    # Basic safety: no script tags or markdown fences
    forbidden = re.search(r"<script|```", code, re.IGNORECASE)
    if forbidden is not None:
        return False

    # Every subgraph must be closed
    opened = sum(1 for l in lines if l.strip().startswith("subgraph "))
    closed = sum(1 for l in lines if l.strip() == "end")
    return opened == closed
