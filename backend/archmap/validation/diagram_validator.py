"""
Diagram Validator - reports what the extracted model will and will not show.

Catches issues like:
- Identifier collisions (a component silently replaced another)
- Dangling interactions (dropped at render time)
- Orphaned components (no rendered connections)
- Self loops and duplicate edges
- Circular dependencies
- Missing synthesized actors

Validation never changes the model and never blocks rendering.
"""

from dataclasses import dataclass, field
from typing import List, Set, Dict, Optional, Tuple
from enum import Enum
from collections import defaultdict

from archmap.errors import DiagramValidationError
from archmap.ir.model import ArchitectureModel, ComponentKind, Interaction
from archmap.pipeline.synthesis import USER_ID, DATABASE_ID


class ValidationSeverity(Enum):
    ERROR = "error"      # Diagram is missing something every run must have
    WARNING = "warning"  # Diagram renders but hides or loses information
    INFO = "info"        # Worth knowing, usually expected


@dataclass
class ValidationIssue:
    """A single validation issue found in the model"""
    severity: ValidationSeverity
    code: str           # Machine-readable issue code
    message: str        # Human-readable description
    node_id: Optional[str] = None
    edge_info: Optional[str] = None
    suggestion: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "node_id": self.node_id,
            "edge_info": self.edge_info,
            "suggestion": self.suggestion,
        }


@dataclass
class DiagramValidationResult:
    """Result of diagram validation"""
    is_valid: bool
    is_complete: bool
    issues: List[ValidationIssue] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.INFO)

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "is_complete": self.is_complete,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "info_count": self.info_count,
            "issues": [i.to_dict() for i in self.issues],
            "stats": self.stats,
        }

    def get_summary(self) -> str:
        """Get human-readable summary"""
        status = "✅ Valid" if self.is_valid else "❌ Invalid"
        completeness = "Complete" if self.is_complete else "Incomplete"
        return (
            f"{status} | {completeness} | "
            f"Errors: {self.error_count}, Warnings: {self.warning_count}, Info: {self.info_count}"
        )


def _edge_info(interaction: Interaction) -> str:
    return f"{interaction.source} -> {interaction.target} ({interaction.label})"


class DiagramValidator:
    """
    Validates an ArchitectureModel after synthesis.

    Usage:
        validator = DiagramValidator()
        result = validator.validate(model)

        for issue in result.issues:
            print(f"[{issue.severity.value}] {issue.message}")
    """

    REQUIRED_ACTORS = (USER_ID, DATABASE_ID)

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode

    def validate(self, model: ArchitectureModel) -> DiagramValidationResult:
        """Validate the entire model."""
        issues: List[ValidationIssue] = []
        rendered = model.renderable_interactions()

        issues.extend(self._check_required_actors(model))
        issues.extend(self._check_collisions(model))
        issues.extend(self._check_dangling_interactions(model))
        issues.extend(self._check_self_loops(rendered))
        issues.extend(self._check_duplicate_edges(rendered))
        issues.extend(self._check_orphaned_components(model, rendered))
        issues.extend(self._check_circular_dependencies(model, rendered))
        issues.extend(self._check_database_connections(model, rendered))

        stats = self._calculate_stats(model, rendered)

        has_errors = any(i.severity == ValidationSeverity.ERROR for i in issues)
        has_warnings = any(i.severity == ValidationSeverity.WARNING for i in issues)

        is_valid = not has_errors
        if self.strict_mode:
            is_valid = not has_errors and not has_warnings

        is_complete = not has_errors and stats["dangling_interactions"] == 0

        return DiagramValidationResult(
            is_valid=is_valid,
            is_complete=is_complete,
            issues=issues,
            stats=stats,
        )

    def _check_required_actors(self, model: ArchitectureModel) -> List[ValidationIssue]:
        issues = []
        for actor_id in self.REQUIRED_ACTORS:
            if not model.has(actor_id):
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="MISSING_ACTOR",
                    message=f"Synthesized actor '{actor_id}' is missing",
                    node_id=actor_id,
                    suggestion="Run actor synthesis after all files are analyzed"
                ))
        return issues

    def _check_collisions(self, model: ArchitectureModel) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="IDENTIFIER_COLLISION",
                message=d.message,
                node_id=d.object_id,
                suggestion="Rename one of the classes; only the last one is shown"
            )
            for d in model.diagnostics
            if d.code == "IDENTIFIER_COLLISION"
        ]

    def _check_dangling_interactions(self, model: ArchitectureModel) -> List[ValidationIssue]:
        issues = []
        for interaction in model.dangling_interactions():
            missing = [
                end for end in (interaction.source, interaction.target)
                if not model.has(end)
            ]
            issues.append(ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="DANGLING_INTERACTION",
                message=(
                    f"Interaction references unknown component(s) "
                    f"{', '.join(repr(m) for m in missing)}; it will not be drawn"
                ),
                edge_info=_edge_info(interaction),
                suggestion="Add a recognized decorator to the referenced class or ignore"
            ))
        return issues

    def _check_self_loops(self, rendered: List[Interaction]) -> List[ValidationIssue]:
        issues = []
        for interaction in rendered:
            if interaction.source == interaction.target:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="SELF_LOOP",
                    message=f"Edge creates self-loop on '{interaction.source}'",
                    node_id=interaction.source,
                    edge_info=_edge_info(interaction),
                    suggestion="Usually the persistence service mentioning itself"
                ))
        return issues

    def _check_duplicate_edges(self, rendered: List[Interaction]) -> List[ValidationIssue]:
        issues = []
        edge_counts: Dict[Tuple[str, str, str], int] = defaultdict(int)
        for interaction in rendered:
            edge_counts[(interaction.source, interaction.target, interaction.label)] += 1
        for (source, target, label), count in edge_counts.items():
            if count > 1:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.INFO,
                    code="DUPLICATE_EDGE",
                    message=f"Duplicate edge '{source}' -> '{target}' ({label}) appears {count} times",
                    edge_info=f"{source} -> {target}",
                ))
        return issues

    def _check_orphaned_components(
        self, model: ArchitectureModel, rendered: List[Interaction]
    ) -> List[ValidationIssue]:
        issues = []
        connected: Set[str] = set()
        for interaction in rendered:
            connected.add(interaction.source)
            connected.add(interaction.target)

        for component in model.components.values():
            # Pages always get a navigation edge; the user has one per page.
            if component.kind in (ComponentKind.CLIENT_PAGE, ComponentKind.USER):
                continue
            if component.kind == ComponentKind.DATABASE:
                continue  # reported by _check_database_connections
            if component.id not in connected:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    code="ORPHANED_COMPONENT",
                    message=f"{component.kind.value} '{component.id}' has no connections",
                    node_id=component.id,
                    suggestion="Check that its constructor and callers follow the recognized patterns"
                ))
        return issues

    def _check_circular_dependencies(
        self, model: ArchitectureModel, rendered: List[Interaction]
    ) -> List[ValidationIssue]:
        issues = []
        adjacency: Dict[str, List[str]] = defaultdict(list)
        for interaction in rendered:
            if interaction.source != interaction.target:
                adjacency[interaction.source].append(interaction.target)

        visited: Set[str] = set()
        rec_stack: Set[str] = set()
        cycles_found: List[List[str]] = []

        # Every back edge is a cycle; keep walking after one is found.
        def dfs(node: str, path: List[str]) -> None:
            visited.add(node)
            rec_stack.add(node)
            for neighbor in adjacency.get(node, []):
                if neighbor not in visited:
                    dfs(neighbor, path + [neighbor])
                elif neighbor in rec_stack:
                    cycle_start = path.index(neighbor)
                    cycles_found.append(path[cycle_start:] + [neighbor])
            rec_stack.remove(node)

        for node in model.components:
            if node not in visited:
                dfs(node, [node])

        for cycle in cycles_found[:3]:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="CIRCULAR_DEPENDENCY",
                message=f"Circular dependency detected: {' -> '.join(cycle)}",
                suggestion="Consider breaking the cycle (forwardRef usually hides one)"
            ))
        return issues

    def _check_database_connections(
        self, model: ArchitectureModel, rendered: List[Interaction]
    ) -> List[ValidationIssue]:
        if not model.has(DATABASE_ID):
            return []
        if any(i.target == DATABASE_ID for i in rendered):
            return []
        return [ValidationIssue(
            severity=ValidationSeverity.INFO,
            code="DATABASE_NO_INCOMING",
            message="Database has no incoming connections",
            node_id=DATABASE_ID,
            suggestion="No persistence service component was found"
        )]

    def _calculate_stats(
        self, model: ArchitectureModel, rendered: List[Interaction]
    ) -> Dict[str, int]:
        type_counts: Dict[ComponentKind, int] = defaultdict(int)
        for component in model.components.values():
            type_counts[component.kind] += 1

        return {
            "components": len(model.components),
            "interactions": len(model.interactions),
            "rendered_interactions": len(rendered),
            "dangling_interactions": len(model.interactions) - len(rendered),
            "pending_references": len(model.pending),
            "pages": type_counts[ComponentKind.CLIENT_PAGE],
            "controllers": type_counts[ComponentKind.CONTROLLER],
            "services": type_counts[ComponentKind.SERVICE],
            "gateways": type_counts[ComponentKind.GATEWAY],
        }


def validate_model(model: ArchitectureModel, strict: bool = False) -> DiagramValidationResult:
    """Convenience function to validate a model."""
    validator = DiagramValidator(strict_mode=strict)
    return validator.validate(model)


def raise_on_errors(model: ArchitectureModel, strict: bool = False) -> DiagramValidationResult:
    """
    Validate model and raise DiagramValidationError if it is not valid.

    In strict mode warnings count as failures too.
    """
    result = validate_model(model, strict=strict)
    if not result.is_valid:
        failing = {ValidationSeverity.ERROR}
        if strict:
            failing.add(ValidationSeverity.WARNING)
        error_messages = [
            f"[{i.code}] {i.message}"
            for i in result.issues
            if i.severity in failing
        ]
        raise DiagramValidationError(
            f"Diagram validation failed with {len(error_messages)} issues:\n" +
            "\n".join(error_messages)
        )
    return result
