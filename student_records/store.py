"""
Flat-file record store for students, courses and enrollments.

Each collection is a text file with one comma-delimited record per line.
Nothing is cached: every call reads the file again, and every change is
either an append or a full rewrite swapped in with os.replace().
"""
import contextlib
import dataclasses
import logging
import os
import shutil
import tempfile

from . import config
from .errors import (
    DuplicateEnrollmentError,
    DuplicateKeyError,
    NotFoundError,
    StorageIOError,
    ValidationError,
)
from .models import CourseRecord, EnrollmentRecord, StudentRecord
from .validators import equals_ignore_case, validate_course_field, validate_student_field

logger = logging.getLogger(__name__)


def _same_key(a, b):
    return equals_ignore_case(a.strip(), b.strip())


class FlatFile:
    """
    A line-oriented text file.

    Missing files read as empty. Any other OS or encoding failure is
    raised as StorageIOError and leaves the file on disk as it was.
    """

    def __init__(self, path):
        self.path = path

    def read_lines(self):
        try:
            with open(self.path, 'r', encoding='utf-8', newline='') as file:
                return [line.rstrip("\r\n") for line in file if line.strip()]
        except FileNotFoundError:
            return []
        except (OSError, UnicodeError) as err:
            logger.error(f"Error reading {self.path}: {err}")
            raise StorageIOError(f"Cannot read {self.path}: {err}") from err

    def append_line(self, line):
        try:
            data = f"{line}\n".encode('utf-8')
            if not self._ends_with_newline():
                data = b"\n" + data
            with open(self.path, 'ab') as file:
                file.write(data)
        except (OSError, UnicodeError) as err:
            logger.error(f"Error appending to {self.path}: {err}")
            raise StorageIOError(f"Cannot write {self.path}: {err}") from err

    def replace_lines(self, lines):
        """
        Writes lines to a temporary file beside the original, closes it, then
        renames it over the original in one step.
        """
        directory = os.path.dirname(os.path.abspath(self.path))
        base = os.path.basename(self.path)
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=f".{base}.", suffix=".tmp", dir=directory)
        except OSError as err:
            logger.error(f"Error creating temporary file for {self.path}: {err}")
            raise StorageIOError(f"Cannot create temporary file for {self.path}: {err}") from err

        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline='') as tmp:
                for line in lines:
                    tmp.write(f"{line}\n")
            if os.path.exists(self.path):
                shutil.copymode(self.path, tmp_path)
            os.replace(tmp_path, self.path)
        except (OSError, UnicodeError) as err:
            with contextlib.suppress(OSError):
                os.remove(tmp_path)
            logger.error(f"Error rewriting {self.path}: {err}")
            raise StorageIOError(f"Cannot rewrite {self.path}: {err}") from err

    def _ends_with_newline(self):
        try:
            with open(self.path, 'rb') as file:
                file.seek(0, os.SEEK_END)
                if file.tell() == 0:
                    return True
                file.seek(-1, os.SEEK_END)
                return file.read(1) == b"\n"
        except FileNotFoundError:
            return True


class _Collection:
    """
    Keyed records of one type backed by a FlatFile.
    Subclasses set record_type, key, label and check_field.
    """

    record_type = None
    key = None
    label = None

    def __init__(self, path):
        self.file = FlatFile(path)

    @staticmethod
    def check_field(field, value):
        raise NotImplementedError

    def _rows(self):
        return [(line, self.record_type.from_fields(line.split(","))) for line in self.file.read_lines()]

    def _key_of(self, record):
        return getattr(record, self.key)

    def all(self):
        return [record for _, record in self._rows()]

    def exists(self, key):
        return self.find(key) is not None

    def find(self, key):
        if key is None:
            return None
        for _, record in self._rows():
            if _same_key(self._key_of(record), key):
                return record
        return None

    def _validate(self, values):
        for field, value in values.items():
            is_valid, error = self.check_field(field, value)
            if not is_valid:
                raise ValidationError(field, error)

    def create(self, record):
        record = self.record_type.from_fields(record.to_fields())
        self._validate(dataclasses.asdict(record))
        key = self._key_of(record)
        if self.exists(key):
            raise DuplicateKeyError(f"{self.label} {key} already exists.")
        self.file.append_line(record.to_line())
        return record

    def update(self, key, updates):
        """
        Applies non-empty values from updates to the record matching key.
        Nothing is written unless every value passes validation.
        """
        columns = self.record_type.columns()
        for field in updates:
            if field not in columns:
                raise ValidationError(field, f"Unknown {self.label.lower()} field '{field}'.")
            if field == self.key:
                raise ValidationError(field, f"{self.label} {self.key} cannot be changed.")

        rows = self._rows()
        for index, (_, record) in enumerate(rows):
            if _same_key(self._key_of(record), key):
                break
        else:
            raise NotFoundError(f"{self.label} {key} not found.")

        changes = {}
        for field, value in updates.items():
            value = "" if value is None else str(value).strip()
            if value:
                changes[field] = value
        self._validate(changes)

        updated = dataclasses.replace(record, **changes)
        if updated == record:
            return record
        lines = [line for line, _ in rows]
        lines[index] = updated.to_line()
        self.file.replace_lines(lines)
        return updated

    def delete(self, key):
        rows = self._rows()
        kept = [line for line, record in rows if not _same_key(self._key_of(record), key)]
        if len(kept) == len(rows):
            raise NotFoundError(f"{self.label} {key} not found.")
        removed = next(record for _, record in rows if _same_key(self._key_of(record), key))
        self.file.replace_lines(kept)
        return removed


class StudentCollection(_Collection):
    record_type = StudentRecord
    key = "id"
    label = "Student"
    check_field = staticmethod(validate_student_field)


class CourseCollection(_Collection):
    record_type = CourseRecord
    key = "code"
    label = "Course"
    check_field = staticmethod(validate_course_field)


class EnrollmentCollection:
    """(student_id, course_code) pairs; both columns compare case-insensitively."""

    def __init__(self, path):
        self.file = FlatFile(path)

    def _rows(self):
        return [(line, EnrollmentRecord.from_fields(line.split(","))) for line in self.file.read_lines()]

    def all(self):
        return [record for _, record in self._rows()]

    def contains(self, student_id, course_code):
        return any(
            _same_key(record.student_id, student_id) and _same_key(record.course_code, course_code)
            for record in self.all()
        )

    def add(self, record):
        self.file.append_line(record.to_line())

    def remove_where(self, predicate):
        """
        Rewrites the file without the records matching predicate.
        Returns how many were removed; the file is untouched when none match.
        """
        rows = self._rows()
        kept = [line for line, record in rows if not predicate(record)]
        removed = len(rows) - len(kept)
        if removed:
            self.file.replace_lines(kept)
        return removed


class RecordStore:
    """
    Single owner of the student, course and enrollment collections.

    Deleting a student or course also removes every enrollment that
    references it. Events go to the audit log when one is given.
    """

    def __init__(self, data_dir=None, audit=None):
        data_dir = data_dir or config.DATA_DIR
        self.data_dir = data_dir
        self.audit = audit
        self.students = StudentCollection(os.path.join(data_dir, config.STUDENTS_FILE))
        self.courses = CourseCollection(os.path.join(data_dir, config.COURSES_FILE))
        self.enrollments = EnrollmentCollection(os.path.join(data_dir, config.ENROLLMENTS_FILE))

    def _record_event(self, event):
        logger.info(event)
        if self.audit is not None:
            self.audit.record(event)

    # Students

    def all_students(self):
        return self.students.all()

    def student_exists(self, student_id):
        return self.students.exists(student_id)

    def find_student(self, student_id):
        return self.students.find(student_id)

    def add_student(self, record):
        record = self.students.create(record)
        self._record_event(f"Added student {record.id}")
        return record

    def update_student(self, student_id, updates):
        record = self.students.update(student_id, updates)
        self._record_event(f"Edited student {record.id}")
        return record

    def delete_student(self, student_id):
        record = self.students.delete(student_id)
        dropped = self.enrollments.remove_where(lambda e: _same_key(e.student_id, record.id))
        self._record_event(f"Deleted student {record.id} and {dropped} enrollment(s)")
        return record

    # Courses

    def all_courses(self):
        return self.courses.all()

    def course_exists(self, course_code):
        return self.courses.exists(course_code)

    def find_course(self, course_code):
        return self.courses.find(course_code)

    def add_course(self, record):
        record = self.courses.create(record)
        self._record_event(f"Added course {record.code}")
        return record

    def update_course(self, course_code, updates):
        record = self.courses.update(course_code, updates)
        self._record_event(f"Edited course {record.code}")
        return record

    def delete_course(self, course_code):
        record = self.courses.delete(course_code)
        dropped = self.enrollments.remove_where(lambda e: _same_key(e.course_code, record.code))
        self._record_event(f"Deleted course {record.code} and {dropped} enrollment(s)")
        return record

    # Enrollments

    def is_enrolled(self, student_id, course_code):
        return self.enrollments.contains(student_id, course_code)

    def enroll(self, student_id, course_code):
        course = self.find_course(course_code)
        if course is None:
            raise NotFoundError(f"Course {course_code} not found.")
        student = self.find_student(student_id)
        if student is None:
            raise NotFoundError(f"Student {student_id} not found.")
        if self.is_enrolled(student.id, course.code):
            raise DuplicateEnrollmentError(f"Student {student.id} is already enrolled in {course.code}.")

        record = EnrollmentRecord(student.id, course.code)
        self.enrollments.add(record)
        self._record_event(f"Student {student.id} enrolled in {course.code}")
        return record

    def drop(self, student_id, course_code):
        removed = self.enrollments.remove_where(
            lambda e: _same_key(e.student_id, student_id) and _same_key(e.course_code, course_code)
        )
        if not removed:
            raise NotFoundError(f"Student {student_id} is not enrolled in {course_code}.")
        self._record_event(f"Student {student_id} dropped course {course_code}")

    def list_by_student(self, student_id):
        """
        Courses the student is enrolled in, in enrollment order.
        Enrollments pointing at a missing course are skipped.
        """
        courses = self.all_courses()
        result = []
        for enrollment in self.enrollments.all():
            if not _same_key(enrollment.student_id, student_id):
                continue
            course = next((c for c in courses if _same_key(c.code, enrollment.course_code)), None)
            if course is not None:
                result.append(course)
        return result

    def list_by_course(self, course_code):
        if not self.course_exists(course_code):
            raise NotFoundError(f"Course {course_code} not found.")
        students = self.all_students()
        result = []
        for enrollment in self.enrollments.all():
            if not _same_key(enrollment.course_code, course_code):
                continue
            # first matching student wins
            student = next((s for s in students if _same_key(s.id, enrollment.student_id)), None)
            if student is not None:
                result.append(student)
        return result
