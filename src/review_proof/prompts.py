import os
from typing import Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import PathCompleter, WordCompleter
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.styles import Style
from prompt_toolkit.validation import Validator

from review_proof.utils import EmployeeOption

prompt_style = Style.from_dict({
    "counter": "ansicyan bold",
    "field":   "ansigreen",
})

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".webp", ".heic", ".bmp")


def _is_image(filename: str) -> bool:
    return filename.lower().endswith(IMAGE_SUFFIXES)


# ========== Prompt Sessions ==========
class SessionFactory:
    @staticmethod
    def build_employee_session(options: Sequence[EmployeeOption]) -> PromptSession:
        words = [o.value for o in options]
        meta = {o.value: o.label for o in options}
        completer = WordCompleter(words, meta_dict=meta, ignore_case=True, sentence=True)
        validator = None
        if options:
            known = {o.value for o in options} | {o.label for o in options}
            validator = Validator.from_callable(
                lambda text: not text.strip() or text.strip() in known,
                error_message="Unknown employee, press Tab to list choices.",
                move_cursor_to_end=True,
            )
        return PromptSession(completer=completer, validator=validator, complete_while_typing=True, style=prompt_style)

    @staticmethod
    def build_image_session() -> PromptSession:
        completer = PathCompleter(
            expanduser=True,
            file_filter=lambda name: os.path.isdir(name) or _is_image(name),
        )
        return PromptSession(completer=completer, style=prompt_style)

    @staticmethod
    def make_prompt_fragments(counter: int, field: str) -> FormattedText:
        return FormattedText([
            ("class:counter", f"[{counter}] "),
            ("class:field", f"{field}: "),
        ])
