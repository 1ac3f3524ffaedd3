import logging
from typing import Dict, List, Optional, Tuple

import sublime
import sublime_plugin
from sublime import Edit, Region, View, get_clipboard, set_clipboard

from .smart_increment.host import ContentType, Question, content_type_of
from .smart_increment.number_codec import has_numbers
from .smart_increment.session import (
    DIRECTION_QUESTION,
    MODE_QUESTION,
    SCAN_QUESTION,
    SCOPE_QUESTION,
    START_LINE_QUESTION,
    STEP_QUESTION,
    Session,
    content_differs,
    mode_label,
    on_shared_content_overwritten,
    parse_line_number,
    parse_step,
    reset,
    trigger,
)
from .smart_increment.settings import Settings

STATUS_KEY = "smart_increment"

session: Session = Session()


def settings_for(v: View) -> Settings:
    return Settings.from_mapping(v.settings())


def needs_configuration() -> bool:
    return not session.active or content_differs(session, get_clipboard())


def selected_rows(v: View) -> Optional[Tuple[int, int]]:
    s = v.sel()
    if all(r.empty() for r in s):
        return None
    begin = s[0].begin()
    end = s[-1].end()
    first, _ = v.rowcol(begin)
    last, col = v.rowcol(end)
    if col == 0 and end > begin:
        last -= 1
    return first, last


def update_status(v: View) -> None:
    if (label := mode_label(session)) is None:
        v.erase_status(STATUS_KEY)
    else:
        v.set_status(STATUS_KEY, f"Smart Increment: {label}")


class SublimeHost:
    def __init__(self, view: View, edit: Edit, answers: Optional[Dict[str, str]] = None):
        self.view = view
        self.edit = edit
        self.answers = answers or {}

    def read_shared_content(self) -> Tuple[str, ContentType]:
        clip = get_clipboard()
        return clip, content_type_of(clip)

    def write_shared_content(self, text: str, content_type: ContentType) -> None:
        set_clipboard(text)

    def _line(self, row: int) -> Region:
        return self.view.line(self.view.text_point(row, 0))

    def read_document_line(self, row: int) -> str:
        return self.view.substr(self._line(row))

    def write_document_line(self, row: int, text: str) -> None:
        self.view.replace(self.edit, self._line(row), text)

    def document_line_count(self) -> int:
        return self.view.rowcol(self.view.size())[0] + 1

    def cursor_line(self) -> int:
        return self.view.rowcol(self.view.sel()[0].b)[0]

    def insert_lines_at(self, row: int, lines: List[str]) -> None:
        v = self.view
        if row >= self.document_line_count():
            v.insert(self.edit, v.size(), "\n" + "\n".join(lines))
        else:
            v.insert(self.edit, v.text_point(row, 0), "\n".join(lines) + "\n")
        v.sel().clear()
        v.sel().add(v.text_point(row, 0))

    def place_text_at_cursor(self, text: str) -> None:
        v = self.view
        for r in reversed(v.sel()):
            v.insert(self.edit, r.end(), text)
        v.show(v.sel()[-1].b, False)

    def prompt(self, question: Question) -> Optional[str]:
        return self.answers.get(question.key)

    def notify(self, message: str, level: int) -> None:
        if "\n" in message:
            print(message)
            message = message.splitlines()[0]
        if level >= logging.ERROR:
            sublime.error_message(message)
        else:
            sublime.status_message(message)


class ChoiceInputHandler(sublime_plugin.ListInputHandler):
    question: Question

    def __init__(self, view: View):
        self.view = view

    def name(self) -> str:
        return self.question.key

    def placeholder(self) -> str:
        return self.question.text

    def list_items(self):
        return [(caption, value) for value, caption in self.question.choices]


class ModeInputHandler(ChoiceInputHandler):
    question = MODE_QUESTION

    def next_input(self, args):
        return DirectionInputHandler(self.view)


class DirectionInputHandler(ChoiceInputHandler):
    question = DIRECTION_QUESTION

    def next_input(self, args):
        return StepInputHandler(self.view)


class StepInputHandler(sublime_plugin.TextInputHandler):
    def __init__(self, view: View):
        self.view = view

    def name(self) -> str:
        return STEP_QUESTION.key

    def placeholder(self) -> str:
        return STEP_QUESTION.text

    def initial_text(self) -> str:
        return "1"

    def validate(self, text: str) -> bool:
        return parse_step(text) is not None

    def next_input(self, args):
        if args.get(MODE_QUESTION.key) == "3" and selected_rows(self.view) is None:
            return ScopeInputHandler(self.view)
        return None


class ScopeInputHandler(ChoiceInputHandler):
    question = SCOPE_QUESTION

    def next_input(self, args):
        if args.get(SCOPE_QUESTION.key) == "2":
            return StartLineInputHandler(self.view)
        return None


class StartLineInputHandler(sublime_plugin.TextInputHandler):
    def __init__(self, view: View):
        self.view = view

    def name(self) -> str:
        return START_LINE_QUESTION.key

    def placeholder(self) -> str:
        return START_LINE_QUESTION.text

    def initial_text(self) -> str:
        return str(self.view.rowcol(self.view.sel()[0].b)[0] + 1)

    def validate(self, text: str) -> bool:
        return parse_line_number(text) is not None

    def next_input(self, args):
        return ScanInputHandler(self.view)


class ScanInputHandler(ChoiceInputHandler):
    question = SCAN_QUESTION


class SmartIncrementCommand(sublime_plugin.TextCommand):
    def input(self, args):
        if MODE_QUESTION.key in args or not needs_configuration():
            return None
        return ModeInputHandler(self.view)

    def input_description(self) -> str:
        return "Smart Increment"

    def run(
        self,
        edit: Edit,
        mode: Optional[str] = None,
        direction: Optional[str] = None,
        step: Optional[str] = None,
        scope: Optional[str] = None,
        start_line: Optional[str] = None,
        scan: Optional[str] = None,
    ) -> None:
        global session
        v = self.view

        if mode is None and needs_configuration() and has_numbers(get_clipboard()):
            window = v.window()
            if window is not None:
                window.run_command(
                    "show_overlay",
                    {"overlay": "command_palette", "command": "smart_increment"},
                )
                return

        answers = {
            key: value
            for key, value in (
                (MODE_QUESTION.key, mode),
                (DIRECTION_QUESTION.key, direction),
                (STEP_QUESTION.key, step),
                (SCOPE_QUESTION.key, scope),
                (START_LINE_QUESTION.key, start_line),
                (SCAN_QUESTION.key, scan),
            )
            if value is not None
        }
        host = SublimeHost(v, edit, answers)
        session = trigger(session, host, settings_for(v), selected_rows(v))
        update_status(v)


class SmartIncrementResetCommand(sublime_plugin.TextCommand):
    def run(self, edit: Edit) -> None:
        global session
        session = reset(session, SublimeHost(self.view, edit))
        update_status(self.view)


class SmartIncrementListener(sublime_plugin.EventListener):
    def on_post_text_command(self, view: View, command_name: str, args) -> None:
        global session
        if view.element() is not None:
            return
        settings = settings_for(view)
        if command_name not in settings.overwrite_commands:
            return
        session = on_shared_content_overwritten(session, settings.watched_tag, settings)
        update_status(view)
