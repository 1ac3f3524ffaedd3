import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Union

from .counter import SequenceCounter
from .errors import DegenerateTemplate, NoMatchesInScope
from .similarity import score
from .template import Template

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.5
MAX_LISTED_LINES = 10
LISTED_WHEN_TRUNCATED = 8

Lines = Union[Sequence[str], Mapping[int, str]]


class MatchCandidate(NamedTuple):
    start: int
    end: int
    text: str
    score: float


def _require_slots(template: Template) -> None:
    if template.slot_count == 0:
        raise DegenerateTemplate()


def iter_candidates(template: Template, line: str) -> Iterator[MatchCandidate]:
    """Every occurrence of the template's shape, overlapping ones included."""
    pos = 0
    while pos < len(line) and (m := template.pattern.search(line, pos)):
        yield MatchCandidate(m.start(), m.end(), m.group(), score(template.source, m.group()))
        pos = m.start() + 1


def find_best(
    template: Template, line: str, threshold: float = DEFAULT_THRESHOLD
) -> Optional[MatchCandidate]:
    _require_slots(template)

    best: Optional[MatchCandidate] = None
    for candidate in iter_candidates(template, line):
        if best is None or candidate.score > best.score:
            best = candidate

    if best is None or best.score < threshold:
        logger.debug("no candidate for %r in %r (best: %s)", template.source, line, best)
        return None
    return best


def splice(line: str, candidate: MatchCandidate, text: str) -> str:
    return line[: candidate.start] + text + line[candidate.end :]


@dataclass
class ReplacementReport:
    pattern: str
    lines_scanned: int = 0
    total: int = 0
    first_value: Optional[str] = None
    last_value: Optional[str] = None
    modified_lines: List[int] = field(default_factory=list)
    new_lines: Dict[int, str] = field(default_factory=dict)

    @property
    def lines_modified(self) -> int:
        return len(self.modified_lines)

    def summary(self) -> str:
        return (
            f"smart-increment: {self.total} replacement(s), "
            f"{self.lines_modified} line(s) modified."
        )

    def line_list(self) -> str:
        numbers = [str(row + 1) for row in self.modified_lines]
        if len(numbers) <= MAX_LISTED_LINES:
            return ", ".join(numbers)
        rest = len(numbers) - LISTED_WHEN_TRUNCATED
        return ", ".join(numbers[:LISTED_WHEN_TRUNCATED]) + f" … +{rest} more"

    def details(self, scope_label: str, direction: str, step) -> str:
        return "\n".join(
            [
                "── smart-increment: detailed report ──",
                f"  Scope        : {scope_label}",
                f"  Pattern      : {self.pattern}",
                f"  Step         : {direction}{step}",
                f"  Lines scanned: {self.lines_scanned}",
                f"  Lines modified: {self.lines_modified}",
                f"  Replacements : {self.total}",
                f"  Value range  : {self.first_value or '?'} → {self.last_value}",
                f"  Modified     : L{self.line_list()}",
            ]
        )


def replace_all(
    template: Template,
    lines: Lines,
    scope_order: Iterable[int],
    counter: SequenceCounter,
) -> ReplacementReport:
    """Replace every occurrence in scope, one counter step per replacement.

    Rows are visited in scope_order and each row left to right, so the
    emitted values follow reading order of the scope. The counter only moves
    when an occurrence is found.
    """
    _require_slots(template)
    report = ReplacementReport(pattern=template.source)

    def substitute(_) -> str:
        value = counter.advance()
        if report.first_value is None:
            report.first_value = value
        report.last_value = value
        return value

    for row in scope_order:
        report.lines_scanned += 1
        new_line, count = template.pattern.subn(substitute, lines[row])
        if count:
            report.total += count
            report.modified_lines.append(row)
            report.new_lines[row] = new_line

    if report.total == 0:
        raise NoMatchesInScope()

    logger.debug(
        "replaced %d occurrence(s) of %r on rows %s",
        report.total,
        template.source,
        report.modified_lines,
    )
    return report
