"""
Architecture model - components, interactions and the aggregator that
collects them while files are analyzed one by one.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

from .errors import Diagnostic


class ComponentKind(Enum):
    CLIENT_PAGE = "ClientPage"
    CONTROLLER = "Controller"
    SERVICE = "Service"
    GATEWAY = "Gateway"
    DATABASE = "Database"
    USER = "User"


class Cluster(Enum):
    """Visual grouping; declaration order is rendering order."""
    USER = "User"
    CLIENT = "Client"
    SERVER = "Server"
    DATABASE = "Database"


KIND_CLUSTER: Dict[ComponentKind, Cluster] = {
    ComponentKind.CLIENT_PAGE: Cluster.CLIENT,
    ComponentKind.CONTROLLER: Cluster.SERVER,
    ComponentKind.SERVICE: Cluster.SERVER,
    ComponentKind.GATEWAY: Cluster.SERVER,
    ComponentKind.DATABASE: Cluster.DATABASE,
    ComponentKind.USER: Cluster.USER,
}


@dataclass(frozen=True)
class Component:
    id: str
    kind: ComponentKind
    label: str
    file_path: str = ""  # empty for synthesized actors

    @property
    def cluster(self) -> Cluster:
        return KIND_CLUSTER[self.kind]


@dataclass(frozen=True)
class Interaction:
    source: str
    target: str
    label: str
    is_async: bool = False


@dataclass
class PendingReference:
    """A client lookup that found nothing when its file was analyzed."""
    source: str
    kind: ComponentKind
    route: Optional[str] = None  # first endpoint segment for controllers
    is_async: bool = False


@dataclass
class ArchitectureModel:
    """
    Component store keyed by identifier plus an append-only interaction log.

    Duplicate identifiers overwrite (last write wins); each overwrite is
    recorded as an IDENTIFIER_COLLISION diagnostic.
    """
    components: Dict[str, Component] = field(default_factory=dict)
    interactions: List[Interaction] = field(default_factory=list)
    pending: List[PendingReference] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def upsert_component(self, component: Component) -> None:
        previous = self.components.get(component.id)
        if previous is not None:
            self.diagnostics.append(
                Diagnostic(
                    level="warning",
                    code="IDENTIFIER_COLLISION",
                    message=(
                        f"'{component.id}' ({previous.kind.value}, "
                        f"{previous.file_path or 'synthesized'}) replaced by "
                        f"{component.kind.value} from {component.file_path or 'synthesized'}"
                    ),
                    object_id=component.id,
                )
            )
        self.components[component.id] = component

    def append_interaction(self, interaction: Interaction) -> None:
        self.interactions.append(interaction)

    def add_pending(self, reference: PendingReference) -> None:
        self.pending.append(reference)

    def has(self, component_id: str) -> bool:
        return component_id in self.components

    def get(self, component_id: str) -> Optional[Component]:
        return self.components.get(component_id)

    def of_kind(self, kind: ComponentKind) -> Iterator[Component]:
        return (c for c in self.components.values() if c.kind == kind)

    def in_cluster(self, cluster: Cluster) -> List[Component]:
        return [c for c in self.components.values() if c.cluster == cluster]

    def first_of_kind(self, kind: ComponentKind) -> Optional[Component]:
        return next(self.of_kind(kind), None)

    def find_controller_by_route(self, route: str) -> Optional[Component]:
        """First controller (insertion order) whose label embeds /api/<route>."""
        needle = f"/api/{route}"
        for component in self.of_kind(ComponentKind.CONTROLLER):
            if needle in component.label:
                return component
        return None

    def renderable_interactions(self) -> List[Interaction]:
        return [
            i for i in self.interactions
            if i.source in self.components and i.target in self.components
        ]

    def dangling_interactions(self) -> List[Interaction]:
        return [
            i for i in self.interactions
            if i.source not in self.components or i.target not in self.components
        ]
