from archmap.compiler.render_mermaid import render_mermaid
from archmap.pipeline.context import PipelineContext


def compile_to_mermaid(context: PipelineContext) -> str:
    return render_mermaid(context.model)
