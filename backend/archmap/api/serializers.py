from typing import Any
from enum import Enum


PRIMITIVE_TYPES = (str, int, float, bool, type(None))


def serialize_ir(obj: Any):
    """
    Serialize model objects into JSON-compatible structures.
    Deterministic. Enums become their values.
    """

    if isinstance(obj, PRIMITIVE_TYPES):
        return obj

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, (list, tuple)):
        return [serialize_ir(item) for item in obj]

    if isinstance(obj, dict):
        return {k: serialize_ir(v) for k, v in obj.items()}

    if hasattr(obj, "__dict__"):
        return {
            key: serialize_ir(value)
            for key, value in obj.__dict__.items()
            if not key.startswith("_")
        }

    return str(obj)
