from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ReplContext:
    """Holds the state of the interactive REPL session."""
    output_format: str = "human"
    style: Optional[str] = None
    precision: Optional[int] = None
    history: List[str] = field(default_factory=list)
