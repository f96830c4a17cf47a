from archmap.pipeline.context import PipelineContext
from archmap.pipeline.stage import PipelineStage
from archmap.pipeline.synthesis import synthesize_external_actors


class SynthesisStage(PipelineStage):
    name = "synthesis"

    def run(self, context: PipelineContext) -> None:
        synthesize_external_actors(context.model, context.rules)
