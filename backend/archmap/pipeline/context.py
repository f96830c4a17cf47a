from dataclasses import dataclass, field
from typing import List, Optional

from archmap.config import DEFAULT_RULES, ExtractionRules
from archmap.extract.source import SourceFile
from archmap.ir.errors import Diagnostic
from archmap.ir.model import ArchitectureModel


@dataclass
class PipelineContext:
    # Raw input (authoritative)
    server_files: List[SourceFile]
    client_files: List[SourceFile]
    client_root: str

    rules: ExtractionRules = DEFAULT_RULES
    resolve_pending: bool = False

    # Built incrementally by the stages
    model: ArchitectureModel = field(default_factory=ArchitectureModel)

    # Outputs
    mermaid: Optional[str] = None
    validation: Optional[object] = None  # DiagramValidationResult

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self.model.diagnostics)
