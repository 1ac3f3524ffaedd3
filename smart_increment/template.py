import re
from dataclasses import dataclass, field
from re import Pattern
from typing import List, Tuple, Union

from .number_codec import iter_tokens

SLOT_PATTERN = r"(-?[0-9]+)"


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Slot:
    raw: str


Part = Union[Literal, Slot]


@dataclass(frozen=True)
class Template:
    """The shape of a string: literal spans with numeric slots between them.

    Matching a Template means every literal span appears verbatim and every
    slot holds some run of digits, optionally negative.
    """

    source: str
    parts: Tuple[Part, ...]
    pattern: Pattern = field(compare=False, repr=False)

    @property
    def slot_count(self) -> int:
        return sum(1 for part in self.parts if isinstance(part, Slot))


def build_pattern(parts: Tuple[Part, ...]) -> Pattern:
    return re.compile(
        "".join(
            re.escape(part.text) if isinstance(part, Literal) else SLOT_PATTERN
            for part in parts
        )
    )


def compile_template(text: str) -> Template:
    parts: List[Part] = []
    last_end = 0
    for start, end, token in iter_tokens(text):
        if start > last_end:
            parts.append(Literal(text[last_end:start]))
        parts.append(Slot(token.raw))
        last_end = end
    if last_end < len(text):
        parts.append(Literal(text[last_end:]))

    frozen = tuple(parts)
    return Template(text, frozen, build_pattern(frozen))
