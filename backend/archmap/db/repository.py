from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from archmap.db.models import GenerationLog
from archmap.pipeline.context import PipelineContext
from archmap.dsl.mermaid import validate_mermaid


def record_generation(session: Session, context: PipelineContext) -> bool:
    """
    Store one generation. Best effort: a database failure is reported and
    swallowed so the diagram is still returned.
    """
    entry = GenerationLog(
        server_file_count=len(context.server_files),
        client_file_count=len(context.client_files),
        component_count=len(context.model.components),
        interaction_count=len(context.model.interactions),
        output=context.mermaid,
        valid_mermaid=validate_mermaid(context.mermaid or ""),
    )
    try:
        session.add(entry)
        session.commit()
        return True
    except SQLAlchemyError as e:
        session.rollback()
        print(f"[DB] ⚠️ Could not record generation: {e}")
        return False


def recent_generations(session: Session, limit: int = 20) -> List[GenerationLog]:
    statement = select(GenerationLog).order_by(GenerationLog.id.desc()).limit(limit)
    return list(session.scalars(statement))
