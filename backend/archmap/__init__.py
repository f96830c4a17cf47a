"""
archmap - regeneratable architecture diagrams for two-tier projects.

Scans a NestJS-style server tree and a Next.js-style client tree with
heuristic text patterns and renders the inferred architecture as Mermaid.
"""

__version__ = "0.1.0"
