from abc import ABC, abstractmethod
from archmap.pipeline.context import PipelineContext


class PipelineStage(ABC):
    name: str

    @abstractmethod
    def run(self, context: PipelineContext) -> None:
        """
        Must:
        - read from context
        - write to context.model only
        - NEVER call other stages
        """
        pass
