"""Server profile: decorated classes, constructor injection, persistence use"""

from archmap.extract import SourceFile, analyze_server_file
from archmap.extract.matchers import api_route, constructor_dependencies
from archmap.ir.model import ArchitectureModel, Cluster, ComponentKind, Interaction


ORDERS_CONTROLLER = """
import { Controller, Get, Param } from '@nestjs/common';
import { OrdersService } from './orders.service';

@Controller('/orders')
export class OrdersController {
  constructor(private readonly svc: OrdersService) {}

  @Get(':id')
  findOne(@Param('id') id: string) {
    return this.svc.findOne(id);
  }
}
"""

ORDERS_SERVICE = """
import { Injectable } from '@nestjs/common';
import { PrismaService } from '../prisma/prisma.service';

@Injectable()
export class OrdersService {
  constructor(private prisma: PrismaService, private readonly events: EventsGateway) {}
}
"""

EVENTS_GATEWAY = """
@WebSocketGateway({ cors: true })
export class EventsGateway {
  @WebSocketServer() server: Server;
}
"""


def analyze(text: str, path: str = "server/src/file.ts") -> ArchitectureModel:
    model = ArchitectureModel()
    analyze_server_file(SourceFile(path, text), model)
    return model


def test_controller_component_and_injection():
    model = analyze(ORDERS_CONTROLLER, "server/src/orders/orders.controller.ts")

    controller = model.get("OrdersController")
    assert controller.kind == ComponentKind.CONTROLLER
    assert controller.cluster == Cluster.SERVER
    assert controller.label == "OrdersController<br><small>/api/orders</small>"
    assert controller.file_path == "server/src/orders/orders.controller.ts"
    assert model.interactions == [Interaction("OrdersController", "OrdersService", "injects")]


def test_controller_route_without_leading_slash():
    model = analyze("@Controller(\"users\")\nexport class UsersController {}")
    assert "/api/users" in model.get("UsersController").label


def test_service_injects_each_parameter_and_uses_persistence():
    model = analyze(ORDERS_SERVICE)

    assert model.get("OrdersService").kind == ComponentKind.SERVICE
    assert model.get("OrdersService").label == "OrdersService"
    assert model.interactions == [
        Interaction("OrdersService", "PrismaService", "injects"),
        Interaction("OrdersService", "EventsGateway", "injects"),
        Interaction("OrdersService", "PrismaService", "uses"),
    ]


def test_gateway_with_options():
    model = analyze(EVENTS_GATEWAY)
    gateway = model.get("EventsGateway")
    assert gateway.kind == ComponentKind.GATEWAY
    assert gateway.label == "EventsGateway<br><small>WebSocket</small>"


def test_controller_marker_wins_over_injectable():
    model = analyze("@Injectable()\n@Controller('a')\nexport class Both {}")
    assert model.get("Both").kind == ComponentKind.CONTROLLER


def test_no_exported_class_contributes_nothing():
    model = analyze("@Injectable()\nclass Hidden { constructor(private a: PrismaService) {} }")
    assert model.components == {}
    assert model.interactions == []


def test_unclassified_class_still_emits_interactions():
    model = analyze("export class Helper {\n  constructor(private readonly repo: Repo) {}\n}")
    assert model.components == {}
    assert model.interactions == [Interaction("Helper", "Repo", "injects")]


def test_only_first_exported_class_is_recognized():
    model = analyze("@Injectable()\nexport class First {}\nexport class Second {}")
    assert list(model.components) == ["First"]


def test_persistence_substring_fires_anywhere():
    model = analyze("@Injectable()\nexport class Audit {}\n// see PrismaService")
    assert model.interactions == [Interaction("Audit", "PrismaService", "uses")]


def test_persistence_service_mentions_itself():
    model = analyze("@Injectable()\nexport class PrismaService extends PrismaClient {}")
    assert model.interactions == [Interaction("PrismaService", "PrismaService", "uses")]


def test_constructor_edge_cases():
    assert constructor_dependencies("export class A { constructor() {} }") == []
    assert constructor_dependencies("export class A {}") == []
    assert constructor_dependencies("constructor(a: A, b, c: C,)") == ["A", "C"]
    assert constructor_dependencies("constructor(public x: X)") == ["X"]
    # Stops at the first closing parenthesis of a decorated parameter.
    assert constructor_dependencies("constructor(@Inject(TOKEN) private cfg: Config)") == []


def test_multiline_constructor_is_supported_when_parens_balance():
    text = "constructor(\n    private readonly a: AService,\n    private b: BService,\n  ) {}"
    assert constructor_dependencies(text) == ["AService", "BService"]


def test_api_route():
    assert api_route("/orders") == "/api/orders"
    assert api_route("orders") == "/api/orders"
    assert api_route("") == "/api"


def test_custom_marker_rules():
    import re
    from archmap.extract.matchers import SERVER_MARKERS, MarkerRule, RegexMatcher

    repository = MarkerRule(
        ComponentKind.SERVICE,
        RegexMatcher("repository", re.compile(r"@EntityRepository\(")),
        lambda name, capture: f"{name}<br><small>Repository</small>",
    )
    model = ArchitectureModel()
    analyze_server_file(
        SourceFile("user.repository.ts", "@EntityRepository(User)\nexport class UserRepository {}"),
        model,
        markers=SERVER_MARKERS + [repository],
    )
    assert model.get("UserRepository").label == "UserRepository<br><small>Repository</small>"
