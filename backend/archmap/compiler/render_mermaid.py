# backend/archmap/compiler/render_mermaid.py

from typing import Dict, List

from archmap.dsl.mermaid import NodeIdMapper, escape_edge_label, escape_label
from archmap.ir.model import ArchitectureModel, Cluster, ComponentKind
from archmap.pipeline.synthesis import USER_ID

CLUSTER_BLOCK_IDS: Dict[Cluster, str] = {
    Cluster.USER: "cluster_user",
    Cluster.CLIENT: "cluster_client",
    Cluster.SERVER: "cluster_server",
    Cluster.DATABASE: "cluster_database",
}

CLUSTER_CLASSES: Dict[Cluster, str] = {
    Cluster.CLIENT: "client",
    Cluster.SERVER: "server",
    Cluster.DATABASE: "db",
    Cluster.USER: "user",
}

CLASS_DEFS = [
    "classDef client fill:#233,stroke:#39c,stroke-width:2px,color:#fff",
    "classDef server fill:#333,stroke:#f90,stroke-width:2px,color:#fff",
    "classDef db fill:#444,stroke:#ccc,stroke-width:2px,color:#fff",
    "classDef user fill:#111,stroke:#999,stroke-width:2px,color:#fff",
]

NAVIGATION_LABEL = "navigates to"


def render_mermaid(model: ArchitectureModel) -> str:
    """
    Model -> Mermaid flowchart text.

    Pure and deterministic: components and interactions are emitted in
    insertion order, so the same model always renders the same text.
    """
    ids = NodeIdMapper(reserved=CLUSTER_BLOCK_IDS.values())
    # Assign ids up front so collision suffixes follow insertion order.
    for component_id in model.components:
        ids.get(component_id)

    lines = ["graph TD"]

    # -------------------------
    # Cluster blocks
    # -------------------------
    members: Dict[Cluster, List[str]] = {cluster: [] for cluster in Cluster}
    for component in model.components.values():
        members[component.cluster].append(
            f'    {ids.get(component.id)}["{escape_label(component.label)}"]'
        )

    for cluster in Cluster:
        if not members[cluster]:
            continue
        lines.append(f'  subgraph {CLUSTER_BLOCK_IDS[cluster]}["{cluster.value}"]')
        lines.extend(members[cluster])
        lines.append("  end")

    # -------------------------
    # Edges (dangling ones dropped)
    # -------------------------
    lines.append("")
    lines.append("  %% Interactions")
    for interaction in model.renderable_interactions():
        arrow = "-.->" if interaction.is_async else "-->"
        lines.append(
            f"  {ids.get(interaction.source)} {arrow}|{escape_edge_label(interaction.label)}| "
            f"{ids.get(interaction.target)}"
        )

    # Implicit navigation; duplicates of explicit edges are expected.
    if model.has(USER_ID):
        for page in model.of_kind(ComponentKind.CLIENT_PAGE):
            lines.append(f"  {ids.get(USER_ID)} -->|{NAVIGATION_LABEL}| {ids.get(page.id)}")

    # -------------------------
    # Styles
    # -------------------------
    lines.append("")
    lines.append("  %% Styles")
    lines.extend(f"  {definition}" for definition in CLASS_DEFS)
    lines.append("")
    for cluster, class_name in CLUSTER_CLASSES.items():
        cluster_ids = [ids.get(c.id) for c in model.in_cluster(cluster)]
        # An empty id list is not valid Mermaid; skip the line instead.
        if cluster_ids:
            lines.append(f"  class {','.join(cluster_ids)} {class_name}")

    return "\n".join(lines) + "\n"
