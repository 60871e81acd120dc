"""Tests for the wall's filter/sort view-model."""

from pauconnect.directory.catalog import COLLEGES, OTHER
from pauconnect.directory.member_directory import (
    FilterState,
    MemberDirectory,
    college_label,
    college_options,
    filter_members,
)
from pauconnect.directory.models import MemberSummary


def member(id, name, **kwargs):
    return MemberSummary(id=id, full_name=name, **kwargs)


ASHA = member("1", "Asha Rao", user_category="Alumni", guidance_needed=True, college="College of Agriculture")
BALA = member(
    "2",
    "Bala Singh",
    user_category="2nd Year",
    guidance_needed=False,
    college="Other",
    other_college_name="IIT Ropar",
)


def names(members):
    return [m.full_name for m in members]


def test_defaults_keep_everyone_in_guidance_first_order():
    result = filter_members([BALA, ASHA], FilterState())
    assert names(result) == ["Asha Rao", "Bala Singh"]


def test_alumni_only_keeps_alumni():
    result = filter_members([ASHA, BALA], FilterState(alumni_only=True))
    assert names(result) == ["Asha Rao"]


def test_search_matches_resolved_college_label_case_insensitively():
    result = filter_members([ASHA, BALA], FilterState(search="ropar"))
    assert names(result) == ["Bala Singh"]


def test_search_matches_any_casing_of_name():
    for query in ("asha", "ASHA RAO", "  aShA  "):
        assert names(filter_members([ASHA, BALA], FilterState(search=query))) == ["Asha Rao"]


def test_search_covers_designation_batch_and_category():
    dev = member("3", "Chen Li", designation="SDE", batch="21st Batch (2021)", user_category="4th Year")
    members = [ASHA, BALA, dev]
    assert names(filter_members(members, FilterState(search="sde"))) == ["Chen Li"]
    assert names(filter_members(members, FilterState(search="21st batch"))) == ["Chen Li"]
    assert names(filter_members(members, FilterState(search="4th year"))) == ["Chen Li"]


def test_guidance_only_never_drops_guidance_seekers():
    members = [
        ASHA,
        BALA,
        member("3", "Dev Patel", guidance_needed=True),
        member("4", "Esha Kaur"),
    ]
    result = filter_members(members, FilterState(guidance_only=True))
    assert {m.id for m in result} == {"1", "3"}


def test_college_filter_uses_label():
    members = [ASHA, BALA, member("3", "Farah Ali", college="Other")]
    assert names(filter_members(members, FilterState(college="IIT Ropar"))) == ["Bala Singh"]
    assert names(filter_members(members, FilterState(college=OTHER))) == ["Farah Ali"]
    assert names(filter_members(members, FilterState(college="College of Agriculture"))) == ["Asha Rao"]


def test_batch_filter_is_exact():
    a = member("1", "A", batch="18th Batch (2018)")
    b = member("2", "B", batch="19th Batch (2019)")
    c = member("3", "C")
    assert names(filter_members([a, b, c], FilterState(batch="19th Batch (2019)"))) == ["B"]


def test_ordering_guidance_then_alumni_then_name():
    members = [
        member("1", "zoe", user_category="1st Year"),
        member("2", "Yuvraj", user_category="Alumni"),
        member("3", "Xavier", guidance_needed=True, user_category="3rd Year"),
        member("4", "Wanda", guidance_needed=True, user_category="Alumni"),
        member("5", "amar", user_category="1st Year"),
    ]
    assert names(filter_members(members, FilterState())) == ["Wanda", "Xavier", "Yuvraj", "amar", "zoe"]


def test_name_ordering_ignores_case_and_accents():
    members = [member("1", "Émile"), member("2", "bala"), member("3", "Chen"), member("4", "Zed")]
    assert names(filter_members(members, FilterState())) == ["bala", "Chen", "Émile", "Zed"]


def test_sort_is_stable_for_identical_keys():
    first = member("a", "Same Name", user_category="Alumni")
    second = member("b", "Same Name", user_category="Alumni")
    assert [m.id for m in filter_members([first, second], FilterState())] == ["a", "b"]
    assert [m.id for m in filter_members([second, first], FilterState())] == ["b", "a"]


def test_result_is_subset_and_input_untouched():
    members = [BALA, ASHA]
    snapshot = list(members)
    result = filter_members(members, FilterState(search="a"))
    assert members == snapshot
    assert all(m in members for m in result)
    assert len({m.id for m in result}) == len(result)


def test_empty_collection():
    assert filter_members([], FilterState(search="anything", guidance_only=True)) == []


def test_college_label_fallbacks():
    assert college_label(member("1", "A")) == "—"
    assert college_label(member("1", "A", college="Other", other_college_name="   ")) == "Other"
    assert college_label(member("1", "A", college="Food Tech", other_college_name="ignored")) == "Food Tech"


def test_college_options_for_scenario():
    options = college_options([ASHA, BALA])
    fixed = [c for c in COLLEGES if c != OTHER]
    assert options == ["All", *fixed, "IIT Ropar", "Other"]


def test_college_options_dedupe_and_sort_free_text_names():
    members = [
        member("1", "A", college="Other", other_college_name="Thapar"),
        member("2", "B", college="Other", other_college_name=" IIT Ropar "),
        member("3", "C", college="Other", other_college_name="Thapar"),
        member("4", "D", college="Food Tech", other_college_name="Ignored"),
        member("5", "E", college="Other", other_college_name=""),
    ]
    assert college_options(members)[-3:] == ["IIT Ropar", "Thapar", "Other"]


def test_directory_recomputes_options_only_on_new_collection():
    directory = MemberDirectory([ASHA])
    assert "IIT Ropar" not in directory.college_options()
    directory.filter_members(FilterState(search="ropar"))
    assert "IIT Ropar" not in directory.college_options()
    directory.replace_members([ASHA, BALA])
    assert "IIT Ropar" in directory.college_options()


def test_directory_drops_duplicate_ids():
    directory = MemberDirectory([ASHA, ASHA, BALA])
    assert len(directory) == 2
    assert directory.get_member_by_id("2") == BALA
    assert directory.get_member_by_id("missing") is None


def test_reset_restores_defaults():
    state = FilterState(search="x", college="Food Tech", batch="B", guidance_only=True, alumni_only=True)
    assert not state.is_default
    assert FilterState.reset().is_default
