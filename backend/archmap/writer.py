import os
from typing import Optional

DEFAULT_TITLE = "Project Architecture Diagram"


def build_markdown(mermaid: str, title: Optional[str] = DEFAULT_TITLE) -> str:
    """Wrap diagram text in a mermaid fence, under an optional heading."""
    body = f"```mermaid\n{mermaid.rstrip()}\n```\n"
    if title is None:
        return body
    return f"# {title}\n\n{body}"


def write_markdown(path: str, content: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
