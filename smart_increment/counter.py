from dataclasses import dataclass, replace

from .number_codec import Number, increment_all


@dataclass
class SequenceCounter:
    sign: int
    step: Number
    current_text: str

    def advance(self) -> str:
        self.current_text = increment_all(self.current_text, self.sign, self.step)
        return self.current_text

    def fork(self, text: str) -> "SequenceCounter":
        return replace(self, current_text=text)

    @property
    def direction_label(self) -> str:
        return "+" if self.sign > 0 else "-"
