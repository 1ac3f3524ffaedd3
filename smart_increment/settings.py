from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from .matcher import DEFAULT_THRESHOLD

PREFIX = "smart_increment_"


@dataclass(frozen=True)
class Settings:
    watched_tag: str = "clipboard"
    linewise_paste: bool = False
    similarity_threshold: float = DEFAULT_THRESHOLD
    multi_report: bool = False
    overwrite_commands: Tuple[str, ...] = ("copy", "cut")

    def __post_init__(self) -> None:
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError(
                f"similarity_threshold must be between 0 and 1, got {self.similarity_threshold}"
            )

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "Settings":
        """Read prefixed keys, e.g. smart_increment_linewise_paste.

        Anything with a get(key, default) method works, a view's settings
        object included.
        """
        defaults = cls()
        return cls(
            watched_tag=str(settings.get(PREFIX + "watched_tag", defaults.watched_tag)),
            linewise_paste=bool(settings.get(PREFIX + "linewise_paste", defaults.linewise_paste)),
            similarity_threshold=float(
                settings.get(PREFIX + "similarity_threshold", defaults.similarity_threshold)
            ),
            multi_report=bool(settings.get(PREFIX + "multi_report", defaults.multi_report)),
            overwrite_commands=_names(
                settings.get(PREFIX + "overwrite_commands", defaults.overwrite_commands)
            ),
        )


def _names(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(str(name) for name in value)
