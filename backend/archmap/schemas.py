from datetime import datetime
from pydantic import BaseModel
from typing import Optional, Dict, Any, List


class SourceFilePayload(BaseModel):
    path: str
    content: str


class GenerateRequest(BaseModel):
    server_files: List[SourceFilePayload] = []
    client_files: List[SourceFilePayload] = []
    client_root: str = "client/app"
    title: Optional[str] = "Project Architecture Diagram"
    resolve_pending: bool = False
    rules: Optional[Dict[str, Any]] = None  # ExtractionRules overrides


class DiagnosticResponse(BaseModel):
    level: str
    code: str
    message: str
    object_id: str


class GenerateResponse(BaseModel):
    status: str  # success | warning
    mermaid: str
    markdown: str
    validation: Dict[str, Any]
    diagnostics: List[DiagnosticResponse] = []
    stats: Dict[str, int] = {}
    components: List[Dict[str, Any]] = []
    interactions: List[Dict[str, Any]] = []


class GenerationLogResponse(BaseModel):
    id: int
    server_file_count: int
    client_file_count: int
    component_count: int
    interaction_count: int
    valid_mermaid: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
