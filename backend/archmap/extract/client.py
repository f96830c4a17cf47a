import os
from typing import Tuple

from archmap.config import DEFAULT_RULES, ExtractionRules
from archmap.extract.matchers import ClientGrammar
from archmap.extract.source import SourceFile
from archmap.ir.model import (
    ArchitectureModel,
    Component,
    ComponentKind,
    Interaction,
    PendingReference,
)


def page_identity(file_path: str, client_root: str, page_filenames) -> Tuple[str, str]:
    """
    (identifier, label) of a client page.

    `client/app/dashboard/page.tsx` under `client/app` gives
    ("Page(dashboard)", "/dashboard"); the root page gives ("Page(/)", "/").
    """
    relative = os.path.relpath(file_path, client_root).replace("\\", "/")
    for filename in page_filenames:
        if relative == filename:
            relative = ""
            break
        if relative.endswith("/" + filename):
            relative = relative[: -len(filename) - 1]
            break
    return f"Page({relative or '/'})", f"/{relative}"


def controller_interaction(page_id: str, route: str, model: ArchitectureModel):
    controller = model.find_controller_by_route(route)
    if controller is None:
        return None
    return Interaction(page_id, controller.id, f"GET /api/{route}")


def gateway_interaction(page_id: str, model: ArchitectureModel):
    gateway = model.first_of_kind(ComponentKind.GATEWAY)
    if gateway is None:
        return None
    return Interaction(page_id, gateway.id, "connects to", is_async=True)


def analyze_client_file(
    source: SourceFile,
    client_root: str,
    model: ArchitectureModel,
    rules: ExtractionRules = DEFAULT_RULES,
) -> None:
    """
    Extract one client page and its calls into the model.

    Controllers and gateways are looked up in the model as it is now, so
    every server file must have been analyzed first. Failed lookups are kept
    as pending references for the optional resolution pass.
    """
    page_id, label = page_identity(source.path, client_root, rules.page_filenames)
    model.upsert_component(
        Component(
            id=page_id,
            kind=ComponentKind.CLIENT_PAGE,
            label=label,
            file_path=source.path,
        )
    )

    grammar = ClientGrammar(rules.api_base_variable, rules.realtime_hook)

    for route in grammar.endpoint_roots(source.text):
        if not route:
            continue
        interaction = controller_interaction(page_id, route, model)
        if interaction is not None:
            model.append_interaction(interaction)
        else:
            model.add_pending(PendingReference(page_id, ComponentKind.CONTROLLER, route=route))

    if grammar.uses_realtime(source.text):
        interaction = gateway_interaction(page_id, model)
        if interaction is not None:
            model.append_interaction(interaction)
        else:
            model.add_pending(PendingReference(page_id, ComponentKind.GATEWAY, is_async=True))
