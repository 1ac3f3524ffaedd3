from enum import IntEnum
from typing import List, NamedTuple, Optional, Protocol, Tuple


class ContentType(IntEnum):
    CHARWISE = 0
    LINEWISE = 1


class Placement(IntEnum):
    AT_CURSOR = 0
    LINES_BELOW = 1


class Question(NamedTuple):
    key: str
    text: str
    choices: Tuple[Tuple[str, str], ...] = ()


class Host(Protocol):
    """What the engine needs from the editor it runs in.

    Rows are 0-based. prompt() answers None when the user cancels.
    """

    def read_shared_content(self) -> Tuple[str, ContentType]:
        ...

    def write_shared_content(self, text: str, content_type: ContentType) -> None:
        ...

    def read_document_line(self, row: int) -> str:
        ...

    def write_document_line(self, row: int, text: str) -> None:
        ...

    def document_line_count(self) -> int:
        ...

    def cursor_line(self) -> int:
        ...

    def insert_lines_at(self, row: int, lines: List[str]) -> None:
        ...

    def place_text_at_cursor(self, text: str) -> None:
        ...

    def prompt(self, question: Question) -> Optional[str]:
        ...

    def notify(self, message: str, level: int) -> None:
        ...


def placement(content_type: ContentType, force_linewise: bool = False) -> Placement:
    if force_linewise or content_type == ContentType.LINEWISE:
        return Placement.LINES_BELOW
    return Placement.AT_CURSOR


def paste_lines(text: str) -> List[str]:
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def content_type_of(text: str) -> ContentType:
    return ContentType.LINEWISE if text.endswith("\n") else ContentType.CHARWISE
