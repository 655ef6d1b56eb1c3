"""
Enumerations for tableqa data models and configuration.

All enums are closed sets - values outside them are rejected by pydantic.
"""

from enum import Enum


class InferenceTask(str, Enum):
    """
    Backend task a connector speaks.

    The value matches the task name used by hosted inference providers.
    """

    TABLE_QUESTION_ANSWERING = "table-question-answering"
    SUMMARIZATION = "summarization"


class RaggedRowPolicy(str, Enum):
    """
    What the table builder does with rows whose length differs from the header.

    PAD: short rows are filled with the fill value, extra values are dropped.
    REJECT: any length mismatch is a parse error.
    """

    PAD = "pad"
    REJECT = "reject"


class DuplicateHeaderPolicy(str, Enum):
    """
    What the table builder does when a header name appears more than once.

    LAST_WINS: one column, placed at the first occurrence, filled from the last.
    REJECT: duplicate names are a parse error.
    """

    LAST_WINS = "last_wins"
    REJECT = "reject"
