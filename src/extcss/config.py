from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserConfig:
    max_nesting_depth: int = 32  # relative pseudo-class arguments, e.g. :not(:has(...))

    def __post_init__(self) -> None:
        if self.max_nesting_depth < 1:
            raise ValueError("max_nesting_depth must be a positive integer")


DEFAULT_CONFIG = ParserConfig()
