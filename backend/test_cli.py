"""Command line entry point against a project on disk"""

from archmap.cli import main

CONTROLLER = "@Controller('orders')\nexport class OrdersController {\n  constructor(private svc: OrdersService) {}\n}\n"
SERVICE = "@Injectable()\nexport class OrdersService {\n  constructor(private prisma: PrismaService) {}\n}\n"
PRISMA = "@Injectable()\nexport class PrismaService {}\n"
PAGE = "export default async function Orders() {\n  await fetch(`${apiUrl}/api/orders`);\n}\n"


def make_project(root):
    server = root / "server" / "src"
    client = root / "client" / "app"
    (server / "orders").mkdir(parents=True)
    (server / "prisma").mkdir(parents=True)
    (client / "orders").mkdir(parents=True)
    (client / "node_modules").mkdir(parents=True)
    (server / "orders" / "orders.controller.ts").write_text(CONTROLLER, encoding="utf-8")
    (server / "orders" / "orders.service.ts").write_text(SERVICE, encoding="utf-8")
    (server / "prisma" / "prisma.service.ts").write_text(PRISMA, encoding="utf-8")
    (client / "orders" / "page.tsx").write_text(PAGE, encoding="utf-8")
    (client / "node_modules" / "page.tsx").write_text(PAGE, encoding="utf-8")
    return root


def test_writes_architecture_markdown(tmp_path):
    make_project(tmp_path)

    assert main(["--project-root", str(tmp_path)]) == 0

    content = (tmp_path / "architecture.md").read_text(encoding="utf-8")
    assert content.startswith("# Project Architecture Diagram\n\n```mermaid\ngraph TD\n")
    assert content.endswith("```\n")
    assert "Page_orders -->|GET /api/orders| OrdersController" in content
    assert "PrismaService -->|queries| Database" in content
    assert "node_modules" not in content


def test_two_runs_are_identical(tmp_path):
    make_project(tmp_path)
    main(["--project-root", str(tmp_path), "--output", "a.md"])
    main(["--project-root", str(tmp_path), "--output", "b.md"])
    assert (tmp_path / "a.md").read_bytes() == (tmp_path / "b.md").read_bytes()


def test_stdout_without_title(tmp_path, capsys):
    make_project(tmp_path)

    assert main(["--project-root", str(tmp_path), "--stdout", "--no-title"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("```mermaid\ngraph TD\n")
    assert not (tmp_path / "architecture.md").exists()


def test_missing_tree_fails(tmp_path, capsys):
    assert main(["--project-root", str(tmp_path)]) == 1
    assert "Source tree not found" in capsys.readouterr().err


def test_config_file_overrides_rules(tmp_path):
    make_project(tmp_path)
    (tmp_path / "rules.yaml").write_text("persistence_service: NothingService\n", encoding="utf-8")

    main(["--project-root", str(tmp_path), "--config", str(tmp_path / "rules.yaml")])

    content = (tmp_path / "architecture.md").read_text(encoding="utf-8")
    assert "-->|queries| Database" not in content


def test_strict_fails_on_warnings_but_still_writes(tmp_path, capsys):
    make_project(tmp_path)

    # prisma.service.ts mentions its own class name: a self loop warning
    assert main(["--project-root", str(tmp_path), "--strict"]) == 2
    assert "[SELF_LOOP]" in capsys.readouterr().err
    assert (tmp_path / "architecture.md").exists()


def test_strict_passes_on_clean_project(tmp_path):
    (tmp_path / "server" / "src").mkdir(parents=True)
    (tmp_path / "client" / "app").mkdir(parents=True)
    (tmp_path / "client" / "app" / "page.tsx").write_text("export default function Home() {}\n", encoding="utf-8")

    assert main(["--project-root", str(tmp_path), "--strict"]) == 0
