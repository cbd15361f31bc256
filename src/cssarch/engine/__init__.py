from cssarch.engine.analyze import (
    RULE_CHECKS,
    ArchitectureError,
    CheckFunc,
    analyze,
    analyze_many,
    analyze_or_raise,
    finalize,
)

__all__ = [
    "RULE_CHECKS",
    "ArchitectureError",
    "CheckFunc",
    "analyze",
    "analyze_many",
    "analyze_or_raise",
    "finalize",
]
