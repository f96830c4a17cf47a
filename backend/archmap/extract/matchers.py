"""
Recognition grammar - small composable matchers over raw source text.

Analysis is heuristic on purpose: no parser, no build step, tolerant of
partial or invalid code. Each matcher returns an optional Capture, so the
profiles in server.py and client.py are just ordered lists of matchers.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Tuple

from archmap.ir.model import ComponentKind


@dataclass(frozen=True)
class Capture:
    """Structured result of a successful match."""
    name: str
    groups: Tuple[str, ...] = ()
    start: int = 0

    @property
    def value(self) -> str:
        return self.groups[0] if self.groups else ""


@dataclass(frozen=True)
class RegexMatcher:
    name: str
    pattern: "re.Pattern[str]"

    def match(self, text: str) -> Optional[Capture]:
        found = self.pattern.search(text)
        if not found:
            return None
        return Capture(self.name, tuple(g or "" for g in found.groups()), found.start())

    def match_all(self, text: str) -> Iterator[Capture]:
        for found in self.pattern.finditer(text):
            yield Capture(self.name, tuple(g or "" for g in found.groups()), found.start())


@dataclass(frozen=True)
class LiteralMatcher:
    """Plain substring search; fires anywhere, comments and strings included."""
    name: str
    literal: str

    def match(self, text: str) -> Optional[Capture]:
        index = text.find(self.literal)
        if index < 0:
            return None
        return Capture(self.name, (self.literal,), index)


# -------------------------
# Server-side grammar
# -------------------------

EXPORTED_CLASS = RegexMatcher("exported_class", re.compile(r"export class (\w+)"))

CONTROLLER_MARKER = RegexMatcher(
    "controller", re.compile(r"""@Controller\(\s*(?:'([^']*)'|"([^"]*)")\s*\)""")
)
INJECTABLE_MARKER = RegexMatcher("injectable", re.compile(r"@Injectable\("))
GATEWAY_MARKER = RegexMatcher("gateway", re.compile(r"@WebSocketGateway\("))

CONSTRUCTOR_PARAMS = RegexMatcher("constructor", re.compile(r"constructor\(([^)]*)\)"))

# [private|public|protected] [readonly] name: Type
INJECTED_PARAM = RegexMatcher(
    "param",
    re.compile(r"(?:private|public|protected)?\s*(?:readonly)?\s*\w+\s*:\s*(\w+)"),
)


def api_route(value: str) -> str:
    """Join a controller prefix to /api with exactly one slash."""
    value = value.strip().strip("/")
    return f"/api/{value}" if value else "/api"


@dataclass(frozen=True)
class MarkerRule:
    """Maps a class decorator to a component kind and its display label."""
    kind: ComponentKind
    matcher: RegexMatcher
    label: Callable[[str, Capture], str]


def _controller_label(class_name: str, capture: Capture) -> str:
    route_value = next((g for g in capture.groups if g), "")
    return f"{class_name}<br><small>{api_route(route_value)}</small>"


def _service_label(class_name: str, capture: Capture) -> str:
    return class_name


def _gateway_label(class_name: str, capture: Capture) -> str:
    return f"{class_name}<br><small>WebSocket</small>"


# First match wins; order matters.
SERVER_MARKERS: List[MarkerRule] = [
    MarkerRule(ComponentKind.CONTROLLER, CONTROLLER_MARKER, _controller_label),
    MarkerRule(ComponentKind.SERVICE, INJECTABLE_MARKER, _service_label),
    MarkerRule(ComponentKind.GATEWAY, GATEWAY_MARKER, _gateway_label),
]


def classify(text: str, markers: List[MarkerRule] = SERVER_MARKERS) -> Optional[Tuple[MarkerRule, Capture]]:
    for rule in markers:
        capture = rule.matcher.match(text)
        if capture is not None:
            return rule, capture
    return None


def constructor_dependencies(text: str) -> List[str]:
    """
    Declared type names of the first constructor's parameters.

    Parameters without a `name: Type` shape are skipped. Signatures with
    nested parentheses (decorated parameters, defaults with calls) stop at
    the first closing parenthesis.
    """
    capture = CONSTRUCTOR_PARAMS.match(text)
    if capture is None:
        return []

    dependencies = []
    for param in capture.value.split(","):
        param = param.strip()
        if not param:
            continue
        dep = INJECTED_PARAM.match(param)
        if dep is not None:
            dependencies.append(dep.value)
    return dependencies


# -------------------------
# Client-side grammar
# -------------------------

@dataclass
class ClientGrammar:
    api_base_variable: str = "apiUrl"
    realtime_hook: str = "useSocket()"
    fetch_call: RegexMatcher = field(init=False)
    realtime_call: LiteralMatcher = field(init=False)

    def __post_init__(self):
        self.fetch_call = RegexMatcher(
            "fetch",
            re.compile(
                r"fetch\(`\$\{" + re.escape(self.api_base_variable) + r"\}/api/([^`]*)`"
            ),
        )
        self.realtime_call = LiteralMatcher("realtime", self.realtime_hook)

    def endpoint_roots(self, text: str) -> List[str]:
        """First path segment of every fetched /api/ endpoint, in source order."""
        roots = []
        for capture in self.fetch_call.match_all(text):
            roots.append(endpoint_root(capture.value))
        return roots

    def uses_realtime(self, text: str) -> bool:
        return self.realtime_call.match(text) is not None


def endpoint_root(endpoint: str) -> str:
    return re.split(r"[/?#]", endpoint, maxsplit=1)[0]
