import sys

from archmap.extract.client import controller_interaction, gateway_interaction
from archmap.ir.model import ArchitectureModel, ComponentKind
from archmap.pipeline.context import PipelineContext
from archmap.pipeline.stage import PipelineStage


def resolve_pending_references(model: ArchitectureModel) -> int:
    """
    Retry client lookups that failed when their page was analyzed.

    Appends an interaction for every reference that now resolves and keeps
    the rest pending. Returns the number resolved. With the server tree
    analyzed first nothing is ever pending for a component that exists, so
    this only changes the result when files were analyzed out of order.
    """
    still_pending = []
    resolved = 0

    for reference in model.pending:
        if reference.kind == ComponentKind.CONTROLLER:
            interaction = controller_interaction(reference.source, reference.route, model)
        else:
            interaction = gateway_interaction(reference.source, model)

        if interaction is None:
            still_pending.append(reference)
        else:
            model.append_interaction(interaction)
            resolved += 1

    model.pending = still_pending
    return resolved


class ResolutionStage(PipelineStage):
    """Second pass over pending client references, once every file is in."""

    name = "resolution"

    def run(self, context: PipelineContext) -> None:
        resolved = resolve_pending_references(context.model)
        print(
            f"[PIPELINE] Resolution pass: {resolved} resolved, "
            f"{len(context.model.pending)} still pending",
            file=sys.stderr,
        )
