import re
from typing import Iterator, NamedTuple, Optional, Tuple, Union

NUMBER_RE = re.compile(r"-?[0-9]+")

Number = Union[int, float]


class NumberToken(NamedTuple):
    raw: str
    value: int


def parse(text: str) -> Optional[NumberToken]:
    if NUMBER_RE.fullmatch(text) is None:
        return None
    return NumberToken(text, int(text))


def has_numbers(text: str) -> bool:
    return NUMBER_RE.search(text) is not None


def strip_numbers(text: str) -> str:
    return NUMBER_RE.sub("", text)


def iter_tokens(text: str) -> Iterator[Tuple[int, int, NumberToken]]:
    for m in NUMBER_RE.finditer(text):
        yield m.start(), m.end(), NumberToken(m.group(), int(m.group()))


def _digits(value: Number) -> str:
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def format_number(original: str, new_value: Number) -> str:
    """Render new_value with the digit width of original.

    Width counts digits only, a leading minus is not part of it. Shorter
    results are zero padded, longer ones are kept whole.
    """
    width = len(original[1:] if original.startswith("-") else original)
    formatted = _digits(abs(new_value)).rjust(width, "0")
    if new_value < 0:
        formatted = f"-{formatted}"
    return formatted


def increment(raw: str, sign: int, step: Number) -> str:
    if (token := parse(raw)) is None:
        return raw
    return format_number(token.raw, token.value + sign * step)


def increment_all(text: str, sign: int, step: Number) -> str:
    return NUMBER_RE.sub(lambda m: increment(m.group(), sign, step), text)
