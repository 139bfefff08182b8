"""
Record types stored one per line in the collection files.
"""
from dataclasses import dataclass, fields


def _pad(values, count):
    values = ["" if v is None else str(v).strip() for v in values[:count]]
    return values + [""] * (count - len(values))


class _LineRecord:
    """
    Mixin mapping a dataclass to and from a comma-delimited line.
    Columns are the dataclass fields in declaration order.
    """

    @classmethod
    def columns(cls):
        return [f.name for f in fields(cls)]

    @classmethod
    def from_fields(cls, values):
        return cls(*_pad(values, len(cls.columns())))

    def to_fields(self):
        return [getattr(self, name) for name in self.columns()]

    def to_line(self):
        return ",".join(self.to_fields())


@dataclass
class StudentRecord(_LineRecord):
    id: str
    name: str
    email: str
    age: str
    program: str
    password: str


@dataclass
class CourseRecord(_LineRecord):
    code: str
    name: str
    units: str


@dataclass
class EnrollmentRecord(_LineRecord):
    student_id: str
    course_code: str
