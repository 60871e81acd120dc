"""
Member directory view-model: filtering and ordering of the public wall.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
import unicodedata

from pauconnect.directory.catalog import ALL, BATCHES, COLLEGES, OTHER, PLACEHOLDER
from pauconnect.directory.models import MemberSummary


@dataclass(frozen=True)
class FilterState:
    search: str = ""
    college: str = ALL
    batch: str = ALL
    guidance_only: bool = False
    alumni_only: bool = False

    @classmethod
    def reset(cls) -> "FilterState":
        return cls()

    @property
    def is_default(self) -> bool:
        return self == FilterState()


def normalize(text: str) -> str:
    return text.strip().casefold()


def college_label(member: MemberSummary) -> str:
    """Human readable college name, with the free-text fallback for "Other"."""
    if member.college != OTHER:
        return member.college or PLACEHOLDER
    if member.other_college_name and member.other_college_name.strip():
        return member.other_college_name
    return OTHER


def collation_key(name: str) -> tuple[str, str, str]:
    """Sort key approximating locale-aware comparison of display names.

    Accents and case are ignored at the first level; lowercase sorts
    before uppercase when the names are otherwise equal.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), base.swapcase(), name)


def _search_text(member: MemberSummary) -> str:
    parts = [
        member.full_name,
        member.designation or "",
        college_label(member),
        member.batch or "",
        member.user_category or "",
    ]
    return " ".join(normalize(part) for part in parts)


def matches(member: MemberSummary, filters: FilterState, query: str | None = None) -> bool:
    """Check a single member against every active filter.

    Args:
        member: The member to test
        filters: Current filter state
        query: Pre-normalized search text; derived from filters when omitted

    Returns:
        True when the member passes all filters
    """
    if filters.guidance_only and not member.guidance_needed:
        return False
    if filters.alumni_only and not member.is_alumni:
        return False
    if filters.college != ALL and college_label(member) != filters.college:
        return False
    if filters.batch != ALL and member.batch != filters.batch:
        return False

    if query is None:
        query = normalize(filters.search)
    if not query:
        return True
    return query in _search_text(member)


def sort_key(member: MemberSummary) -> tuple:
    # Guidance seekers first, then alumni, then by name.
    return (
        not member.guidance_needed,
        not member.is_alumni,
        collation_key(member.full_name),
    )


def filter_members(members: Iterable[MemberSummary], filters: FilterState) -> list[MemberSummary]:
    """
    Derive the visible, ordered list of members for the wall.

    Args:
        members: Full collection of public records
        filters: Current filter state

    Returns:
        New list of matching members, stably ordered
    """
    query = normalize(filters.search)
    visible = [member for member in members if matches(member, filters, query)]
    visible.sort(key=sort_key)
    return visible


def college_options(members: Iterable[MemberSummary]) -> list[str]:
    """Selectable colleges: fixed names, free-text names seen on the wall, then "Other"."""
    other_names = {
        member.other_college_name.strip()
        for member in members
        if member.college == OTHER
        and member.other_college_name
        and member.other_college_name.strip()
    }
    fixed = [college for college in COLLEGES if college != OTHER]
    return [ALL, *fixed, *sorted(other_names, key=collation_key), OTHER]


def batch_options() -> list[str]:
    return [ALL, *BATCHES]


class MemberDirectory:
    """Filter and sort public member records loaded for one wall view."""

    def __init__(self, members: Iterable[MemberSummary] = ()):
        self._members: tuple[MemberSummary, ...] = ()
        self._college_options: list[str] = []
        self.replace_members(members)

    @property
    def members(self) -> tuple[MemberSummary, ...]:
        return self._members

    def replace_members(self, members: Iterable[MemberSummary]) -> None:
        """Swap in a freshly fetched collection and rebuild the college options."""
        unique: dict[str, MemberSummary] = {}
        for member in members:
            unique.setdefault(member.id, member)
        self._members = tuple(unique.values())
        self._college_options = college_options(self._members)

    def college_options(self) -> list[str]:
        return list(self._college_options)

    def batch_options(self) -> list[str]:
        return batch_options()

    def filter_members(self, filters: FilterState | None = None) -> list[MemberSummary]:
        return filter_members(self._members, filters or FilterState())

    def get_member_by_id(self, member_id: str) -> MemberSummary | None:
        for member in self._members:
            if member.id == member_id:
                return member
        return None

    def __len__(self) -> int:
        return len(self._members)
