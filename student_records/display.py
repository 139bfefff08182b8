"""
Text rendering for record listings.

Functions return strings; printing is left to the console layer.
"""
from enum import Enum


class DisplayMode(Enum):
    TABLE = "table"
    SUMMARY = "summary"

    @classmethod
    def from_choice(cls, choice):
        """
        Maps the menu answer "1" or "2" to a mode, anything else to None.
        """
        if choice == "1":
            return cls.TABLE
        if choice == "2":
            return cls.SUMMARY
        return None

    @classmethod
    def from_name(cls, name):
        for mode in cls:
            if mode.value == name:
                return mode
        return None


def render_students(students, mode):
    if mode is DisplayMode.TABLE:
        lines = [
            f"{'ID':<12}{'Name':<22}{'Email':<28}{'Age':<6}{'Program':<16}",
            "-" * 84,
        ]
        for s in students:
            lines.append(f"{s.id:<12}{s.name:<22}{s.email:<28}{s.age:<6}{s.program:<16}")
    elif mode is DisplayMode.SUMMARY:
        lines = ["Student IDs and Names:"]
        lines.extend(f"{s.id} - {s.name}" for s in students)
    else:
        raise ValueError(f"Unknown display mode: {mode}")
    return "\n".join(lines)


def render_courses(courses, mode):
    if mode is DisplayMode.TABLE:
        lines = [
            f"{'Code':<12}{'Name':<32}{'Units':<8}",
            "-" * 52,
        ]
        for c in courses:
            lines.append(f"{c.code:<12}{c.name:<32}{c.units:<8}")
    elif mode is DisplayMode.SUMMARY:
        lines = ["Course Codes and Names:"]
        lines.extend(f"{c.code} - {c.name}" for c in courses)
    else:
        raise ValueError(f"Unknown display mode: {mode}")
    return "\n".join(lines)


def render_profile(student):
    return (
        f"ID: {student.id}\n"
        f"Name: {student.name}\n"
        f"Email: {student.email}\n"
        f"Age: {student.age}\n"
        f"Program: {student.program}"
    )


def render_course_line(course):
    return f"{course.code} - {course.name} ({course.units} units)"


def render_enrolled_courses(courses):
    if not courses:
        return "None."
    return "\n".join(render_course_line(c) for c in courses)
