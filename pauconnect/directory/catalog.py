"""
Fixed enumerations shared by the directory, the profile form and the API.
"""
from __future__ import annotations

UNIVERSITY = "Punjab Agricultural University"

ALL = "All"
OTHER = "Other"
ALUMNI = "Alumni"
PLACEHOLDER = "—"

COLLEGES: tuple[str, ...] = (
    "College of Agriculture Engineering",
    "College of Agriculture",
    "College of Community Science",
    "College of Basic Science",
    "College of Horticulture",
    "Food Tech",
    "Bio Tech",
    "College of Fisheries",
    OTHER,
)

USER_CATEGORIES: tuple[str, ...] = (ALUMNI, "1st Year", "2nd Year", "3rd Year", "4th Year")

BATCHES: tuple[str, ...] = (
    "15th Batch (2015)",
    "16th Batch (2016)",
    "17th Batch (2017)",
    "18th Batch (2018)",
    "19th Batch (2019)",
    "20th Batch (2020)",
    "21st Batch (2021)",
    "22nd Batch (2022)",
    "23rd Batch (2023)",
    "24th Batch (2024)",
    "25th Batch (2025)",
)

ADMISSION_MODES: dict[str, str] = {
    "ICAR": "ICAR exam",
    "CET": "CET",
}

DEFAULT_COLLEGE = COLLEGES[0]
DEFAULT_CATEGORY = ALUMNI
DEFAULT_BATCH = BATCHES[-1]
DEFAULT_ADMISSION_MODE = "ICAR"

PUBLIC_COLUMNS: tuple[str, ...] = (
    "id",
    "full_name",
    "college",
    "other_college_name",
    "user_category",
    "batch",
    "designation",
    "guidance_needed",
    "profile_photo_path",
    "created_at",
    "updated_at",
)
