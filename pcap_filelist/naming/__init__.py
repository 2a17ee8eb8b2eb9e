from .pattern import (
    ABSENT,
    THREAD_ID_TOKEN,
    THREAD_NUMBER_TOKEN,
    TIMESTAMP_TOKEN,
    MatchingRule,
    compile_template,
)

__all__ = [
    "ABSENT",
    "THREAD_ID_TOKEN",
    "THREAD_NUMBER_TOKEN",
    "TIMESTAMP_TOKEN",
    "MatchingRule",
    "compile_template",
]
