import os
from dataclasses import dataclass, field, fields, replace
from typing import List, Optional

import yaml
from dotenv import load_dotenv

from archmap.errors import ConfigError

# Load .env from project root
load_dotenv()

SERVER_DIR = os.getenv("ARCHMAP_SERVER_DIR", os.path.join("server", "src"))
CLIENT_DIR = os.getenv("ARCHMAP_CLIENT_DIR", os.path.join("client", "app"))
OUTPUT_FILE = os.getenv("ARCHMAP_OUTPUT_FILE", "architecture.md")
TITLE = os.getenv("ARCHMAP_TITLE", "Project Architecture Diagram")
DATABASE_URL = os.getenv("ARCHMAP_DATABASE_URL", "sqlite:///./archmap.db")
RESOLVE_PENDING = os.getenv("ARCHMAP_RESOLVE_PENDING", "false").lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class ExtractionRules:
    """
    Names and conventions the extractors look for.

    Defaults describe a NestJS server with Prisma and a Next.js app router
    client. Any field can be overridden from a YAML file.
    """
    persistence_service: str = "PrismaService"
    api_base_variable: str = "apiUrl"
    realtime_hook: str = "useSocket()"
    page_filenames: List[str] = field(
        default_factory=lambda: ["page.tsx", "page.ts", "page.jsx", "page.js"]
    )
    source_extensions: List[str] = field(default_factory=lambda: [".ts", ".tsx"])
    ignore_dirs: List[str] = field(
        default_factory=lambda: ["node_modules", ".next", "dist", "logs", "public"]
    )
    ignore_files: List[str] = field(
        default_factory=lambda: [".DS_Store", "package-lock.json", "yarn.lock"]
    )

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_RULES = ExtractionRules()

_LIST_FIELDS = {"page_filenames", "source_extensions", "ignore_dirs", "ignore_files"}


def load_rules(path: Optional[str] = None) -> ExtractionRules:
    """
    Load extraction rules, applying overrides from a YAML file.

    The file is a flat mapping of ExtractionRules field names. A missing
    path (None) returns the defaults.
    """
    if path is None:
        return DEFAULT_RULES

    if not os.path.exists(path):
        raise ConfigError(f"Rules file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    return rules_from_dict(data or {}, source=path)


def rules_from_dict(data: dict, source: str = "<dict>") -> ExtractionRules:
    if not isinstance(data, dict):
        raise ConfigError(f"Rules in {source} must be a mapping")

    known = {f.name for f in fields(ExtractionRules)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown rule keys in {source}: {', '.join(unknown)}")

    overrides = {}
    for key, value in data.items():
        if key in _LIST_FIELDS:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"Rule '{key}' in {source} must be a list of strings")
            overrides[key] = list(value)
        else:
            if not isinstance(value, str) or not value:
                raise ConfigError(f"Rule '{key}' in {source} must be a non-empty string")
            overrides[key] = value

    return replace(DEFAULT_RULES, **overrides)
