from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .config import DEFAULT_POLL_SECONDS, EMPTY_CONFIRM_OPEN_QUERY
from .coords import START, Position
from .listing import Listing
from .session import FileSession


class Mode(Enum):
    COMMAND = "command"
    SWITCH = "switch"


@dataclass
class EditorState:
    mode: Mode = Mode.COMMAND
    run: bool = True
    dirty: bool = True
    sessions: list[FileSession] = field(default_factory=list)
    current: int = 0
    path: Path = field(default_factory=Path.cwd)
    show_hidden: bool = False
    listing: Listing | None = None
    query: str = ""
    view: list[str] = field(default_factory=list)
    selected: int = 0
    list_offset: Position = START
    empty_confirm: str = EMPTY_CONFIRM_OPEN_QUERY
    poll_seconds: float = DEFAULT_POLL_SECONDS
    last_poll: float = 0.0
    page_lines: int = 20
    status_message: str = ""
    status_message_until: float = 0.0

    @property
    def current_session(self) -> FileSession | None:
        if 0 <= self.current < len(self.sessions):
            return self.sessions[self.current]
        return None

    @property
    def paths(self) -> tuple[str, ...]:
        return self.listing.paths if self.listing is not None else ()
