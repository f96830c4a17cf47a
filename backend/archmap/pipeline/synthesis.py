"""
Facts no single file shows: the human user, the database behind the
persistence service, and the edge between them.

Run once, strictly after every file has been analyzed.
"""

from archmap.config import DEFAULT_RULES, ExtractionRules
from archmap.ir.model import ArchitectureModel, Component, ComponentKind, Interaction

USER_ID = "User"
DATABASE_ID = "Database"


def add_user_actor(model: ArchitectureModel) -> None:
    model.upsert_component(Component(id=USER_ID, kind=ComponentKind.USER, label="👤 User"))


def add_database_actor(model: ArchitectureModel) -> None:
    model.upsert_component(
        Component(id=DATABASE_ID, kind=ComponentKind.DATABASE, label="🗄️ Database")
    )


def link_persistence_to_database(
    model: ArchitectureModel,
    rules: ExtractionRules = DEFAULT_RULES,
) -> bool:
    if not model.has(rules.persistence_service):
        return False
    model.append_interaction(Interaction(rules.persistence_service, DATABASE_ID, "queries"))
    return True


def synthesize_external_actors(
    model: ArchitectureModel,
    rules: ExtractionRules = DEFAULT_RULES,
) -> None:
    add_user_actor(model)
    add_database_actor(model)
    link_persistence_to_database(model, rules)
