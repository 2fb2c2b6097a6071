import copy
from typing import Iterable, List, Tuple

from .backend_logic import CourseEntry

EDITABLE_FIELDS = ("name", "credits", "grade")


class CourseList:
    """
    The editable list of courses held by one page session.

    There is always at least one row: removing the last one is refused and
    replacing the contents with nothing leaves a single blank row.
    """

    def __init__(self, entries: Iterable[CourseEntry] = ()):
        self._entries: List[CourseEntry] = []
        self.replace(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, course_id: str) -> CourseEntry:
        for entry in self._entries:
            if entry.id == course_id:
                return entry
        raise KeyError(course_id)

    def add(self) -> CourseEntry:
        entry = CourseEntry()
        self._entries.append(entry)
        return entry

    def remove(self, course_id: str) -> bool:
        if len(self._entries) <= 1:
            return False
        for idx, entry in enumerate(self._entries):
            if entry.id == course_id:
                del self._entries[idx]
                return True
        return False

    def update(self, course_id: str, field: str, value) -> CourseEntry:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown course field: {field!r}. Expected one of {EDITABLE_FIELDS}.")
        entry = self[course_id]
        setattr(entry, field, value)
        return entry

    def reset(self) -> None:
        self._entries = [CourseEntry()]

    def replace(self, entries: Iterable[CourseEntry]) -> None:
        self._entries = list(entries)
        if not self._entries:
            self.reset()

    def snapshot(self) -> Tuple[CourseEntry, ...]:
        return tuple(copy.copy(entry) for entry in self._entries)
