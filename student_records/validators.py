"""
Input predicates shared by the record store and the console prompts.

All checks are ASCII-only: a name like "José" is rejected the same way the
console has always rejected it.
"""
import re

_ALPHANUMERIC = re.compile(r"[A-Za-z0-9]+")
_LETTERS_ONLY = re.compile(r"[A-Za-z ]+")
_WHOLE_NUMBER = re.compile(r"[0-9]+")

_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


def is_alphanumeric(value):
    return isinstance(value, str) and _ALPHANUMERIC.fullmatch(value) is not None


def is_letters_only(value):
    return isinstance(value, str) and _LETTERS_ONLY.fullmatch(value) is not None


def is_whole_number(value):
    return isinstance(value, str) and _WHOLE_NUMBER.fullmatch(value) is not None


def equals_ignore_case(a, b):
    """
    Compares two strings folding only A-Z to lowercase.
    """
    if not isinstance(a, str) or not isinstance(b, str):
        return False
    if len(a) != len(b):
        return False
    return a.translate(_ASCII_LOWER) == b.translate(_ASCII_LOWER)


def _validate_key(value, label):
    if value is not None and ' ' in value:
        return False, f"{label} must not contain spaces."
    if not is_alphanumeric(value):
        return False, f"{label} must be strictly alphanumeric."
    return True, ""


def validate_student_field(field, value):
    """
    Validates one student field and returns (is_valid, error_message).
    Email, program and password are free text.
    """
    if field == "id":
        return _validate_key(value, "Student ID")
    if field == "name" and not is_letters_only(value):
        return False, "Name should be letters only."
    if field == "age" and not is_whole_number(value):
        return False, "Age should be a whole number."
    return True, ""


def validate_course_field(field, value):
    """
    Validates one course field and returns (is_valid, error_message).
    """
    if field == "code":
        return _validate_key(value, "Course code")
    if field == "units" and not is_whole_number(value):
        return False, "Units should be a whole number."
    return True, ""
