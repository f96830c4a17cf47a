"""Mermaid rendering: layout, edges, styles and escaping"""

from archmap.compiler.render_mermaid import render_mermaid
from archmap.dsl.mermaid import NodeIdMapper, parse_rendered, safe_id, validate_mermaid
from archmap.ir.model import ArchitectureModel, Component, ComponentKind, Interaction
from archmap.pipeline.synthesis import synthesize_external_actors

EMPTY_DIAGRAM = """graph TD
  subgraph cluster_user["User"]
    User["👤 User"]
  end
  subgraph cluster_database["Database"]
    Database["🗄️ Database"]
  end

  %% Interactions

  %% Styles
  classDef client fill:#233,stroke:#39c,stroke-width:2px,color:#fff
  classDef server fill:#333,stroke:#f90,stroke-width:2px,color:#fff
  classDef db fill:#444,stroke:#ccc,stroke-width:2px,color:#fff
  classDef user fill:#111,stroke:#999,stroke-width:2px,color:#fff

  class Database db
  class User user
"""


def make_model() -> ArchitectureModel:
    model = ArchitectureModel()
    model.upsert_component(
        Component("OrdersController", ComponentKind.CONTROLLER, "OrdersController<br><small>/api/orders</small>")
    )
    model.upsert_component(Component("OrdersService", ComponentKind.SERVICE, "OrdersService"))
    model.upsert_component(Component("EventsGateway", ComponentKind.GATEWAY, "EventsGateway<br><small>WebSocket</small>"))
    model.upsert_component(Component("Page(dashboard)", ComponentKind.CLIENT_PAGE, "/dashboard"))
    model.append_interaction(Interaction("OrdersController", "OrdersService", "injects"))
    model.append_interaction(Interaction("OrdersService", "Missing", "injects"))
    model.append_interaction(Interaction("Page(dashboard)", "OrdersController", "GET /api/orders"))
    model.append_interaction(Interaction("Page(dashboard)", "EventsGateway", "connects to", is_async=True))
    synthesize_external_actors(model)
    return model


def test_empty_model_renders_only_actors():
    model = ArchitectureModel()
    synthesize_external_actors(model)
    assert render_mermaid(model) == EMPTY_DIAGRAM


def test_cluster_blocks_in_fixed_order():
    text = render_mermaid(make_model())
    positions = [text.index(f'subgraph cluster_{name}') for name in ("user", "client", "server", "database")]
    assert positions == sorted(positions)


def test_edges_and_navigation():
    text = render_mermaid(make_model())

    assert "  OrdersController -->|injects| OrdersService\n" in text
    assert "  Page_dashboard -->|GET /api/orders| OrdersController\n" in text
    assert "  Page_dashboard -.->|connects to| EventsGateway\n" in text
    assert "  User -->|navigates to| Page_dashboard\n" in text
    assert "Missing" not in text


def test_class_assignments():
    text = render_mermaid(make_model())
    assert "  class Page_dashboard client\n" in text
    assert "  class OrdersController,OrdersService,EventsGateway server\n" in text
    assert "  class Database db\n" in text
    assert "  class User user\n" in text


def test_output_is_valid_and_deterministic():
    model = make_model()
    first = render_mermaid(model)
    assert first == render_mermaid(model)
    assert validate_mermaid(first)


def test_every_rendered_edge_endpoint_is_declared_earlier():
    parsed = parse_rendered(render_mermaid(make_model()))
    assert parsed.edges
    for source, target, _, _, line in parsed.edges:
        assert parsed.node_line[source] < line
        assert parsed.node_line[target] < line


def test_each_component_in_exactly_one_block_and_class():
    model = make_model()
    parsed = parse_rendered(render_mermaid(model))

    assert len(parsed.nodes) == len(model.components)
    for node_id in parsed.nodes:
        assert len(parsed.node_cluster[node_id]) == 1
        assigned = [cls for cls, ids in parsed.class_assignments.items() if node_id in ids]
        assert len(assigned) == 1


def test_labels_are_escaped():
    model = ArchitectureModel()
    model.upsert_component(Component("A", ComponentKind.SERVICE, 'say "hi"'))
    model.upsert_component(Component("B", ComponentKind.SERVICE, "B"))
    model.append_interaction(Interaction("A", "B", 'a|b "c"'))
    text = render_mermaid(model)

    assert 'A["say #quot;hi#quot;"]' in text
    assert "A -->|a#124;b #quot;c#quot;| B" in text


def test_arbitrary_identifiers_get_safe_unique_ids():
    model = ArchitectureModel()
    model.upsert_component(Component("Page(a-b)", ComponentKind.CLIENT_PAGE, "/a-b"))
    model.upsert_component(Component("Page(a_b)", ComponentKind.CLIENT_PAGE, "/a_b"))
    model.upsert_component(Component("Page(/)", ComponentKind.CLIENT_PAGE, "/"))
    synthesize_external_actors(model)
    parsed = parse_rendered(render_mermaid(model))

    assert {"Page_a_b", "Page_a_b_2", "Page"} <= set(parsed.nodes)
    assert parsed.class_assignments["client"] == ["Page_a_b", "Page_a_b_2", "Page"]


def test_node_ids_never_reuse_subgraph_ids():
    model = ArchitectureModel()
    model.upsert_component(Component("cluster_server", ComponentKind.SERVICE, "cluster_server"))
    synthesize_external_actors(model)
    text = render_mermaid(model)
    parsed = parse_rendered(text)

    assert '  subgraph cluster_server["Server"]' in text
    assert '    cluster_server_2["cluster_server"]' in text
    assert "cluster_server" not in parsed.nodes
    assert parsed.node_cluster["cluster_server_2"] == ["cluster_server"]
    assert parsed.class_assignments["server"] == ["cluster_server_2"]


def test_safe_id():
    assert safe_id("Page(dashboard)") == "Page_dashboard"
    assert safe_id("Page(orders/[id])") == "Page_orders_id"
    assert safe_id("end") == "n_end"
    assert safe_id("()") == "node"
    assert safe_id("Café") == "Caf"


def test_id_mapper_is_stable():
    ids = NodeIdMapper()
    assert ids.get("x-y") == "x_y"
    assert ids.get("x_y") == "x_y_2"
    assert ids.get("x-y") == "x_y"


def test_validate_mermaid_rejects_broken_documents():
    assert not validate_mermaid("")
    assert not validate_mermaid("pie\n  A")
    assert not validate_mermaid("graph TD\n  subgraph s\n    A\n")
    assert not validate_mermaid("graph TD\n```\n")
