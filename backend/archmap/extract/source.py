from dataclasses import dataclass


@dataclass(frozen=True)
class SourceFile:
    path: str
    text: str
