from typing import List

from archmap.config import DEFAULT_RULES, ExtractionRules
from archmap.extract.matchers import (
    EXPORTED_CLASS,
    SERVER_MARKERS,
    LiteralMatcher,
    MarkerRule,
    classify,
    constructor_dependencies,
)
from archmap.extract.source import SourceFile
from archmap.ir.model import ArchitectureModel, Component, Interaction


def analyze_server_file(
    source: SourceFile,
    model: ArchitectureModel,
    rules: ExtractionRules = DEFAULT_RULES,
    markers: List[MarkerRule] = SERVER_MARKERS,
) -> None:
    """
    Extract facts from one server file into the model.

    - the first exported class names the component
    - the first matching decorator decides its kind (none: no component)
    - constructor parameter types become "injects" interactions
    - any mention of the persistence service becomes a "uses" interaction
    """
    class_match = EXPORTED_CLASS.match(source.text)
    if class_match is None:
        return
    class_name = class_match.value

    classified = classify(source.text, markers)
    if classified is not None:
        rule, capture = classified
        model.upsert_component(
            Component(
                id=class_name,
                kind=rule.kind,
                label=rule.label(class_name, capture),
                file_path=source.path,
            )
        )

    # Emitted even for unclassified classes; dropped at render time if so.
    for dependency in constructor_dependencies(source.text):
        model.append_interaction(Interaction(class_name, dependency, "injects"))

    persistence = LiteralMatcher("persistence", rules.persistence_service)
    if persistence.match(source.text) is not None:
        model.append_interaction(
            Interaction(class_name, rules.persistence_service, "uses")
        )
