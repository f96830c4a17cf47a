from archmap.extract.server import analyze_server_file
from archmap.pipeline.context import PipelineContext
from archmap.pipeline.stage import PipelineStage


class ServerExtractionStage(PipelineStage):
    name = "server_extraction"

    def run(self, context: PipelineContext) -> None:
        for source in context.server_files:
            analyze_server_file(source, context.model, context.rules)
