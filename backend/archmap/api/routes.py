from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from archmap.api.serializers import serialize_ir
from archmap.config import rules_from_dict, DEFAULT_RULES
from archmap.db.repository import record_generation, recent_generations
from archmap.db.session import get_session
from archmap.errors import ArchmapError
from archmap.extract.source import SourceFile
from archmap.pipeline.controller import PipelineController
from archmap.schemas import (
    GenerateRequest,
    GenerateResponse,
    GenerationLogResponse,
)
from archmap.writer import build_markdown

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/generate", response_model=GenerateResponse)
def generate_architecture(request: GenerateRequest, session: Session = Depends(get_session)):
    try:
        rules = rules_from_dict(request.rules, source="request") if request.rules else DEFAULT_RULES
    except ArchmapError as e:
        raise HTTPException(status_code=400, detail=str(e))

    server_files = [SourceFile(f.path, f.content) for f in request.server_files]
    client_files = [SourceFile(f.path, f.content) for f in request.client_files]

    controller = PipelineController(rules)
    context = controller.run(
        server_files,
        client_files,
        request.client_root,
        resolve_pending=request.resolve_pending,
    )

    record_generation(session, context)

    validation = context.validation
    return GenerateResponse(
        status="warning" if validation.warning_count or validation.error_count else "success",
        mermaid=context.mermaid,
        markdown=build_markdown(context.mermaid, request.title),
        validation=validation.to_dict(),
        diagnostics=[serialize_ir(d) for d in context.diagnostics],
        stats=validation.stats,
        components=[
            {**serialize_ir(c), "cluster": c.cluster.value}
            for c in context.model.components.values()
        ],
        interactions=serialize_ir(context.model.interactions),
    )


@router.get("/generations", response_model=List[GenerationLogResponse])
def list_generations(
    limit: int = Query(20, ge=1, le=200),
    session: Session = Depends(get_session),
):
    try:
        return recent_generations(session, limit)
    except SQLAlchemyError as e:
        print(f"[DB] ⚠️ Could not read generation log: {e}")
        raise HTTPException(status_code=503, detail="Generation log unavailable")
