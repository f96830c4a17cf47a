from archmap.extract.client import analyze_client_file
from archmap.pipeline.context import PipelineContext
from archmap.pipeline.stage import PipelineStage


class ClientExtractionStage(PipelineStage):
    """Must run after ServerExtractionStage: pages link to controllers and
    gateways already in the model."""

    name = "client_extraction"

    def run(self, context: PipelineContext) -> None:
        for source in context.client_files:
            analyze_client_file(source, context.client_root, context.model, context.rules)
