from .counter import SequenceCounter
from .errors import (
    DegenerateTemplate,
    EmptyOrNonNumericSource,
    InvalidPromptInput,
    NoMatchesInScope,
    NoStructuralMatch,
    SmartIncrementError,
)
from .host import ContentType, Host, Placement, Question, placement
from .matcher import MatchCandidate, ReplacementReport, find_best, replace_all
from .number_codec import NumberToken, format_number, increment, parse
from .session import (
    Direction,
    ExplicitRange,
    FromLine,
    Mode,
    Session,
    Whole,
    describe,
    is_active,
    mode_label,
    on_shared_content_overwritten,
    reset,
    trigger,
)
from .settings import Settings
from .similarity import score
from .template import Literal, Slot, Template, compile_template

__all__ = [
    "ContentType",
    "DegenerateTemplate",
    "Direction",
    "EmptyOrNonNumericSource",
    "ExplicitRange",
    "FromLine",
    "Host",
    "InvalidPromptInput",
    "Literal",
    "MatchCandidate",
    "Mode",
    "NoMatchesInScope",
    "NoStructuralMatch",
    "NumberToken",
    "Placement",
    "Question",
    "ReplacementReport",
    "SequenceCounter",
    "Session",
    "Settings",
    "Slot",
    "SmartIncrementError",
    "Template",
    "Whole",
    "compile_template",
    "describe",
    "find_best",
    "format_number",
    "increment",
    "is_active",
    "mode_label",
    "on_shared_content_overwritten",
    "parse",
    "placement",
    "replace_all",
    "reset",
    "score",
    "trigger",
]
