# ABOUTME: ReadingHistory tracks any number of reading sessions for one book.
# ABOUTME: Sessions use PartialDate so imprecise memories can still be recorded.

from dataclasses import dataclass
from enum import Enum
from typing import Any

from bookledger.metadata.dates import PartialDate


class ReadingState(str, Enum):
    """Derived view over a reading history. Never stored."""

    NEVER_READ = "never-read"
    CURRENTLY_READING = "currently-reading"
    FINISHED_AT_LEAST_ONCE = "finished"
    FINISHED_MULTIPLE_TIMES = "finished-multiple"


@dataclass
class ReadingEntry:
    """A single reading session. A missing finish means it is still open."""

    start: PartialDate | None = None
    finish: PartialDate | None = None

    @property
    def is_currently_reading(self) -> bool:
        return self.finish is None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReadingEntry":
        start = data.get("start")
        finish = data.get("finish")
        return cls(
            start=PartialDate.from_dict(start) if isinstance(start, dict) else None,
            finish=PartialDate.from_dict(finish) if isinstance(finish, dict) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        # An empty finish ({}) means "finished, date unknown" and must survive encoding.
        result: dict[str, Any] = {}
        if self.start is not None:
            result["start"] = self.start.to_dict()
        if self.finish is not None:
            result["finish"] = self.finish.to_dict()
        return result


@dataclass
class ReadingHistory:
    """Your reading history with a single book.

    Handles precise and imprecise histories alike:

    - "I've read this book before"
    - "I've read this book multiple times"
    - "I read this book in 2018"
    - "I'm reading this book now"
    - "I read this book from June 28 through July 3, 2021"

    Setting ``multiple_readings`` to True also sets ``has_read``; clearing it
    leaves ``has_read`` alone.

    The mutators never leave two sessions open at once, but a history built
    directly from an entries list is taken as given. ``finish_reading`` copes
    with such a history by closing the earliest open session.
    """

    has_read: bool = False
    multiple_readings: bool = False
    entries: list[ReadingEntry] | None = None

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if name == "multiple_readings" and value:
            super().__setattr__("has_read", True)

    @property
    def is_currently_reading(self) -> bool:
        return any(entry.is_currently_reading for entry in self.entries or [])

    @property
    def open_entries(self) -> list[ReadingEntry]:
        return [entry for entry in self.entries or [] if entry.is_currently_reading]

    @property
    def finished_entries(self) -> list[ReadingEntry]:
        return [entry for entry in self.entries or [] if not entry.is_currently_reading]

    @property
    def state(self) -> ReadingState:
        if self.is_currently_reading:
            return ReadingState.CURRENTLY_READING
        finished = len(self.finished_entries)
        if self.multiple_readings or finished > 1:
            return ReadingState.FINISHED_MULTIPLE_TIMES
        if self.has_read or finished == 1:
            return ReadingState.FINISHED_AT_LEAST_ONCE
        return ReadingState.NEVER_READ

    def start_reading(self, start: PartialDate | None = None) -> None:
        """Record the start of a reading session.

        Does nothing if a session is already open.

        Args:
            start: When reading started. None if unknown or unspecified.
        """
        if self.is_currently_reading:
            return
        entry = ReadingEntry(start=start, finish=None)
        if self.entries is None:
            self.entries = [entry]
        else:
            self.entries.append(entry)

    def finish_reading(self, finish: PartialDate) -> None:
        """Record the end of a reading session.

        Closes the earliest open session, on the assumption that sessions are
        finished in the order they were started. With no open session, a
        closed session with an unknown start is appended.

        ``finish`` may carry as little detail as wanted: an empty PartialDate
        says the book was finished without saying when.
        """
        if self.entries is None:
            self.entries = []
        for entry in self.entries:
            if entry.is_currently_reading:
                entry.finish = finish
                break
        else:
            self.entries.append(ReadingEntry(start=None, finish=finish))
        self.has_read = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReadingHistory":
        has_read = data.get("hasRead")
        multiple = data.get("multipleReadings")
        raw_entries = data.get("entries")
        entries = None
        if isinstance(raw_entries, list):
            entries = [ReadingEntry.from_dict(e) for e in raw_entries if isinstance(e, dict)]
        return cls(
            has_read=has_read if isinstance(has_read, bool) else False,
            multiple_readings=multiple if isinstance(multiple, bool) else False,
            entries=entries,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "hasRead": self.has_read,
            "multipleReadings": self.multiple_readings,
        }
        if self.entries is not None:
            result["entries"] = [entry.to_dict() for entry in self.entries]
        return result
