from sqlalchemy import Column, Integer, Text, Boolean, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class GenerationLog(Base):
    __tablename__ = "generation_logs"

    id = Column(Integer, primary_key=True)
    server_file_count = Column(Integer, nullable=False, default=0)
    client_file_count = Column(Integer, nullable=False, default=0)
    component_count = Column(Integer, nullable=False, default=0)
    interaction_count = Column(Integer, nullable=False, default=0)
    output = Column(Text)
    valid_mermaid = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
