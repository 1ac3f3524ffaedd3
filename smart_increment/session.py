"""The increment session: what to do each time the user triggers the engine.

A Session is a plain value. Every handler takes the current one and returns
its successor, so the caller decides where the single live session is kept.
Handlers report problems through host.notify() and hand back the session
they were given, untouched.
"""
import logging
import math
import re
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .counter import SequenceCounter
from .errors import (
    DegenerateTemplate,
    EmptyOrNonNumericSource,
    InvalidPromptInput,
    NoStructuralMatch,
    SmartIncrementError,
)
from .host import ContentType, Host, Placement, Question, paste_lines, placement
from .matcher import find_best, replace_all, splice
from .number_codec import Number, has_numbers
from .settings import Settings
from .template import Template, compile_template

logger = logging.getLogger(__name__)

LINE_NUMBER_RE = re.compile(r"[0-9]+")


class Lifecycle(IntEnum):
    UNINITIALIZED = 0
    ACTIVE = 1


class Mode(Enum):
    PASTE = "paste"
    REPLACE_LINE = "sr_line"
    REPLACE_MULTI = "sr_multi"


MODE_LABELS = {
    Mode.PASTE: "Paste only",
    Mode.REPLACE_LINE: "Search & Replace (current line)",
    Mode.REPLACE_MULTI: "Search & Replace (multi-line)",
}


class Direction(Enum):
    DOWN = "down"
    UP = "up"


@dataclass(frozen=True)
class Whole:
    pass


@dataclass(frozen=True)
class FromLine:
    start_line: int  # 1-based, as typed
    direction: Direction


@dataclass(frozen=True)
class ExplicitRange:
    first: int
    last: int


Scope = Union[Whole, FromLine, ExplicitRange]
Selection = Tuple[int, int]

MODE_QUESTION = Question(
    "mode",
    "Mode — [1] Paste  [2] S&R current line  [3] S&R multi-line: ",
    (("1", MODE_LABELS[Mode.PASTE]), ("2", MODE_LABELS[Mode.REPLACE_LINE]), ("3", MODE_LABELS[Mode.REPLACE_MULTI])),
)
DIRECTION_QUESTION = Question(
    "direction", "Increment or decrement? (+/-): ", (("+", "Increment"), ("-", "Decrement"))
)
STEP_QUESTION = Question("step", "Step amount: ")
SCOPE_QUESTION = Question(
    "scope",
    "Scope — [1] Whole file  [2] From line number: ",
    (("1", "Whole file"), ("2", "From line number")),
)
START_LINE_QUESTION = Question("start_line", "Start line number: ")
SCAN_QUESTION = Question(
    "scan",
    "Direction — [d] Down (towards end)  [u] Up (towards top): ",
    (("d", "Down (towards end)"), ("u", "Up (towards top)")),
)

MODE_ANSWERS = {"1": Mode.PASTE, "2": Mode.REPLACE_LINE, "3": Mode.REPLACE_MULTI}
SCAN_ANSWERS = {"d": Direction.DOWN, "u": Direction.UP}


@dataclass(frozen=True)
class Session:
    lifecycle: Lifecycle = Lifecycle.UNINITIALIZED
    mode: Optional[Mode] = None
    counter: Optional[SequenceCounter] = None
    scope: Optional[Scope] = None
    snapshot: Optional[str] = None
    original_content: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.lifecycle == Lifecycle.ACTIVE


ContentChanged = Callable[[Session, str], bool]


def content_differs(session: Session, content: str) -> bool:
    return content != session.snapshot


# Text helpers


def is_multiline(content: str) -> bool:
    if content.endswith("\n"):
        content = content[:-1]
    return "\n" in content


def first_line(content: str) -> str:
    return content.split("\n", 1)[0]


def replace_first_line(content: str, new_first_line: str) -> str:
    _, sep, rest = content.partition("\n")
    return new_first_line + sep + rest


# Scope


def resolve_scope(scope: Optional[Scope], line_count: int) -> List[int]:
    if line_count <= 0:
        return []
    if isinstance(scope, ExplicitRange):
        first, last = sorted((scope.first, scope.last))
        return list(range(max(first, 0), min(last, line_count - 1) + 1))
    if isinstance(scope, FromLine):
        start = max(1, min(scope.start_line, line_count)) - 1
        if scope.direction == Direction.DOWN:
            return list(range(start, line_count))
        return list(range(start, -1, -1))
    return list(range(line_count))


def scope_label(scope: Optional[Scope]) -> str:
    if isinstance(scope, ExplicitRange):
        first, last = sorted((scope.first, scope.last))
        return f"selection (L{first + 1}–L{last + 1})"
    if isinstance(scope, FromLine):
        return f"from L{scope.start_line} {scope.direction.value}"
    return "whole file"


# Prompts


def _report(host: Host, error: SmartIncrementError) -> None:
    logger.debug("%s: %s", type(error).__name__, error.message)
    host.notify(error.message, error.level)


def _answer(host: Host, question: Question) -> Optional[str]:
    if (answer := host.prompt(question)) is None:
        return None
    return answer.strip()


def parse_step(raw: Optional[str]) -> Optional[Number]:
    if raw is None:
        return None
    try:
        whole = int(raw)
    except ValueError:
        pass
    else:
        return whole if whole > 0 else None
    try:
        amount = float(raw)
    except ValueError:
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return int(amount) if amount.is_integer() else amount


def parse_line_number(raw: Optional[str]) -> Optional[int]:
    """1-based line number written in ASCII digits, None for anything else."""
    if raw is None or LINE_NUMBER_RE.fullmatch(raw) is None:
        return None
    line = int(raw)
    return line if line >= 1 else None


def prompt_mode(host: Host) -> Optional[Mode]:
    if (mode := MODE_ANSWERS.get(_answer(host, MODE_QUESTION) or "")) is None:
        _report(host, InvalidPromptInput("Invalid mode selection."))
    return mode


def prompt_direction_and_step(host: Host) -> Optional[Tuple[int, Number]]:
    direction = _answer(host, DIRECTION_QUESTION)
    if direction not in ("+", "-"):
        _report(host, InvalidPromptInput("Cancelled or invalid. Use + or -."))
        return None

    if (step := parse_step(_answer(host, STEP_QUESTION))) is None:
        _report(host, InvalidPromptInput("Invalid amount. Must be a positive number.", logging.ERROR))
        return None

    return (1 if direction == "+" else -1), step


def prompt_scope(host: Host) -> Optional[Scope]:
    choice = _answer(host, SCOPE_QUESTION)
    if choice == "1":
        return Whole()
    if choice != "2":
        _report(host, InvalidPromptInput("Invalid scope selection."))
        return None

    if (start_line := parse_line_number(_answer(host, START_LINE_QUESTION))) is None:
        _report(host, InvalidPromptInput("Invalid line number.", logging.ERROR))
        return None

    if (direction := SCAN_ANSWERS.get(_answer(host, SCAN_QUESTION) or "")) is None:
        _report(host, InvalidPromptInput("Invalid direction. Use d or u."))
        return None

    return FromLine(start_line, direction)


def check_source(content: str, tag: str) -> None:
    if not content:
        raise EmptyOrNonNumericSource(f"smart-increment: {tag} is empty.")
    if not has_numbers(content):
        raise EmptyOrNonNumericSource(f"smart-increment: no numbers found in {tag}.")


def configure(host: Host, content: str, from_selection: bool = False) -> Optional[Session]:
    """Ask for mode, direction, step and (multi-line only) scope.

    None means the user cancelled or answered something unusable; the
    reason has already been reported.
    """
    if (mode := prompt_mode(host)) is None:
        return None
    if (direction_and_step := prompt_direction_and_step(host)) is None:
        return None
    sign, step = direction_and_step

    scope: Optional[Scope] = None
    if mode == Mode.REPLACE_MULTI and not from_selection:
        if (scope := prompt_scope(host)) is None:
            return None

    return Session(
        lifecycle=Lifecycle.ACTIVE,
        mode=mode,
        counter=SequenceCounter(sign, step, content),
        scope=scope,
        snapshot=content,
        original_content=content,
    )


# Mode handlers


def _search_template(host: Host, content: str) -> Tuple[str, Template]:
    if is_multiline(content):
        host.notify(
            "smart-increment: multiline content — using first line for search.",
            logging.WARNING,
        )
    line = first_line(content)
    template = compile_template(line)
    if template.slot_count == 0:
        raise DegenerateTemplate()
    return line, template


def _write_back(
    session: Session, host: Host, new_first_line: str, content_type: ContentType
) -> Session:
    new_content = replace_first_line(session.counter.current_text, new_first_line)
    host.write_shared_content(new_content, content_type)
    return replace(session, counter=session.counter.fork(new_content), snapshot=new_content)


def handle_paste(
    session: Session,
    host: Host,
    settings: Settings,
    content_type: ContentType,
    selection: Optional[Selection],
) -> Session:
    counter = session.counter.fork(session.counter.current_text)
    text = counter.advance()

    if placement(content_type, settings.linewise_paste) == Placement.LINES_BELOW:
        host.insert_lines_at(host.cursor_line() + 1, paste_lines(text))
    else:
        host.place_text_at_cursor(text)

    host.write_shared_content(text, content_type)
    logger.info("pasted %r", text)
    return replace(session, counter=counter, snapshot=text)


def handle_replace_line(
    session: Session,
    host: Host,
    settings: Settings,
    content_type: ContentType,
    selection: Optional[Selection],
) -> Session:
    line_text, template = _search_template(host, session.counter.current_text)

    row = host.cursor_line()
    line = host.read_document_line(row)
    if (candidate := find_best(template, line, settings.similarity_threshold)) is None:
        raise NoStructuralMatch()

    incremented = session.counter.fork(line_text).advance()
    host.write_document_line(row, splice(line, candidate, incremented))
    logger.info("replaced %r with %r on row %d", candidate.text, incremented, row)
    return _write_back(session, host, incremented, content_type)


def handle_replace_multi(
    session: Session,
    host: Host,
    settings: Settings,
    content_type: ContentType,
    selection: Optional[Selection],
) -> Session:
    line_text, template = _search_template(host, session.counter.current_text)

    scope = ExplicitRange(*selection) if selection is not None else session.scope
    order = resolve_scope(scope, host.document_line_count())
    lines = {row: host.read_document_line(row) for row in order}

    counter = session.counter.fork(line_text)
    report = replace_all(template, lines, order, counter)
    for row in report.modified_lines:
        host.write_document_line(row, report.new_lines[row])

    logger.info(report.summary())
    host.notify(report.summary(), logging.INFO)
    if settings.multi_report:
        host.notify(
            report.details(scope_label(scope), counter.direction_label, counter.step),
            logging.INFO,
        )
    return _write_back(session, host, counter.current_text, content_type)


HANDLERS = {
    Mode.PASTE: handle_paste,
    Mode.REPLACE_LINE: handle_replace_line,
    Mode.REPLACE_MULTI: handle_replace_multi,
}


# Events


def trigger(
    session: Session,
    host: Host,
    settings: Settings,
    selection: Optional[Selection] = None,
    content_changed: ContentChanged = content_differs,
) -> Session:
    """Run one increment: configure first if needed, then do the mode's work.

    selection is an inclusive (first_row, last_row) pair when the trigger
    came from a selection; it replaces the configured multi-line scope.
    """
    content, content_type = host.read_shared_content()

    if session.active and content_changed(session, content):
        logger.info("%s changed since the last operation, starting over", settings.watched_tag)
        session = Session()

    if not session.active:
        try:
            check_source(content, settings.watched_tag)
        except SmartIncrementError as e:
            _report(host, e)
            return session
        if (configured := configure(host, content, selection is not None)) is None:
            return session
        session = configured
        logger.info(
            "configured %s, step %s%s",
            session.mode.value,
            session.counter.direction_label,
            session.counter.step,
        )

    try:
        return HANDLERS[session.mode](session, host, settings, content_type, selection)
    except SmartIncrementError as e:
        _report(host, e)
        return session


def reset(session: Session, host: Host) -> Session:
    if session.active:
        logger.info("reset from %s", session.mode.value)
    host.notify("smart-increment: reset", logging.INFO)
    return Session()


def on_shared_content_overwritten(session: Session, tag: str, settings: Settings) -> Session:
    if not session.active or tag != settings.watched_tag:
        return session
    logger.debug("%s overwritten, session will re-prompt", tag)
    return Session()


def is_active(session: Session) -> bool:
    return session.active


def mode_label(session: Session) -> Optional[str]:
    if not session.active:
        return None
    return MODE_LABELS[session.mode]


def describe(session: Session) -> Optional[Dict[str, Any]]:
    if not session.active:
        return None
    return {
        "mode": session.mode.value,
        "sign": session.counter.sign,
        "step": session.counter.step,
        "current_text": session.counter.current_text,
        "original_content": session.original_content,
        "snapshot": session.snapshot,
        "scope": scope_label(session.scope) if session.mode == Mode.REPLACE_MULTI else None,
    }
