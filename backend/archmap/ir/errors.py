from dataclasses import dataclass


@dataclass
class Diagnostic:
    level: str
    code: str
    message: str
    object_id: str
