"""
Input side of the pipeline: find source files and read them.
"""

import os
from typing import List

from archmap.config import DEFAULT_RULES, ExtractionRules
from archmap.errors import SourceTreeError
from archmap.extract.source import SourceFile


def get_project_files(root: str, rules: ExtractionRules = DEFAULT_RULES) -> List[str]:
    """
    Recursively list source files under root, sorted.

    Ignored directory names are pruned wherever they appear; ignored file
    names and unknown extensions are skipped.
    """
    if not os.path.isdir(root):
        raise SourceTreeError(f"Source tree not found: {root}")

    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in rules.ignore_dirs]
        for filename in filenames:
            if filename in rules.ignore_files:
                continue
            if not filename.endswith(tuple(rules.source_extensions)):
                continue
            files.append(os.path.join(dirpath, filename))
    return sorted(files)


def read_sources(paths: List[str]) -> List[SourceFile]:
    sources = []
    for path in paths:
        with open(path, "r", encoding="utf-8") as f:
            sources.append(SourceFile(path=path, text=f.read()))
    return sources


def load_tree(root: str, rules: ExtractionRules = DEFAULT_RULES) -> List[SourceFile]:
    return read_sources(get_project_files(root, rules))
