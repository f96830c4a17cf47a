import sys
from typing import List, Optional

from archmap.compiler import compile_to_mermaid
from archmap.config import DEFAULT_RULES, ExtractionRules
from archmap.extract.source import SourceFile
from archmap.pipeline.client_stage import ClientExtractionStage
from archmap.pipeline.context import PipelineContext
from archmap.pipeline.resolution_stage import ResolutionStage
from archmap.pipeline.server_stage import ServerExtractionStage
from archmap.pipeline.synthesis_stage import SynthesisStage
from archmap.validation import validate_model


class PipelineController:
    """
    Runs one analysis over already-read source files.

    Stage order is a contract: every server file is analyzed before any
    client file, because pages link to controllers and gateways by looking
    them up in the model. Synthesis runs last so the persistence check sees
    the complete model.
    """

    def __init__(self, rules: ExtractionRules = DEFAULT_RULES):
        self.rules = rules
        self.server_stage = ServerExtractionStage()
        self.client_stage = ClientExtractionStage()
        self.resolution_stage = ResolutionStage()
        self.synthesis_stage = SynthesisStage()

    def stages(self, resolve_pending: bool = False) -> list:
        stages = [self.server_stage, self.client_stage]
        if resolve_pending:
            stages.append(self.resolution_stage)
        stages.append(self.synthesis_stage)
        return stages

    def run(
        self,
        server_files: List[SourceFile],
        client_files: List[SourceFile],
        client_root: str,
        resolve_pending: bool = False,
        rules: Optional[ExtractionRules] = None,
    ) -> PipelineContext:
        context = PipelineContext(
            server_files=list(server_files),
            client_files=list(client_files),
            client_root=client_root,
            rules=rules or self.rules,
            resolve_pending=resolve_pending,
        )

        for stage in self.stages(resolve_pending):
            stage.run(context)

        model = context.model
        print(
            f"[PIPELINE] {len(context.server_files)} server / {len(context.client_files)} client files -> "
            f"{len(model.components)} components, {len(model.interactions)} interactions",
            file=sys.stderr,
        )

        context.validation = validate_model(model)
        print(f"[VALIDATOR] {context.validation.get_summary()}", file=sys.stderr)
        for diagnostic in model.diagnostics:
            print(f"[PIPELINE] ⚠️ {diagnostic.code}: {diagnostic.message}", file=sys.stderr)

        context.mermaid = compile_to_mermaid(context)
        return context
