import pytest

from student_records.validators import (
    equals_ignore_case,
    is_alphanumeric,
    is_letters_only,
    is_whole_number,
    validate_course_field,
    validate_student_field,
)


@pytest.mark.parametrize("value, expected", [
    ("S1", True),
    ("abcXYZ019", True),
    ("", False),
    ("S 1", False),
    ("S-1", False),
    ("S1\n", False),
    ("é1", False),
    ("１２", False),
    (None, False),
])
def test_is_alphanumeric(value, expected):
    assert is_alphanumeric(value) is expected


@pytest.mark.parametrize("value, expected", [
    ("Ann Lee", True),
    ("  ", True),
    ("Ann3", False),
    ("O'Neil", False),
    ("José", False),
    ("", False),
])
def test_is_letters_only(value, expected):
    assert is_letters_only(value) is expected


@pytest.mark.parametrize("value, expected", [
    ("0", True),
    ("007", True),
    ("20", True),
    ("-1", False),
    ("+1", False),
    ("1.5", False),
    (" 1", False),
    ("٣", False),
    ("", False),
])
def test_is_whole_number(value, expected):
    assert is_whole_number(value) is expected


def test_equals_ignore_case():
    assert equals_ignore_case("CS101", "cs101")
    assert equals_ignore_case("", "")
    assert not equals_ignore_case("CS101", "CS10")
    assert not equals_ignore_case("CS101", "CS102")
    # only ASCII letters fold
    assert not equals_ignore_case("É", "é")
    assert not equals_ignore_case(None, "a")


def test_student_field_messages():
    assert validate_student_field("id", "S1") == (True, "")
    assert validate_student_field("id", "S 1") == (False, "Student ID must not contain spaces.")
    assert validate_student_field("id", "S-1") == (False, "Student ID must be strictly alphanumeric.")
    assert validate_student_field("name", "Ann3") == (False, "Name should be letters only.")
    assert validate_student_field("age", "twenty") == (False, "Age should be a whole number.")
    assert validate_student_field("email", "not an email") == (True, "")


def test_course_field_messages():
    assert validate_course_field("code", "CS 101") == (False, "Course code must not contain spaces.")
    assert validate_course_field("code", "") == (False, "Course code must be strictly alphanumeric.")
    assert validate_course_field("units", "3.5") == (False, "Units should be a whole number.")
    assert validate_course_field("name", "") == (True, "")
