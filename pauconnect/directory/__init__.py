"""
Directory module for the public wall: member records, filtering and profile views.
"""
from pauconnect.directory.feed import DirectoryFeed
from pauconnect.directory.member_directory import (
    FilterState,
    MemberDirectory,
    college_label,
    college_options,
    filter_members,
)
from pauconnect.directory.models import MemberProfile, MemberSummary
from pauconnect.directory.profile_view import build_card, build_profile_view

__all__ = [
    "DirectoryFeed",
    "FilterState",
    "MemberDirectory",
    "college_label",
    "college_options",
    "filter_members",
    "MemberProfile",
    "MemberSummary",
    "build_card",
    "build_profile_view",
]
