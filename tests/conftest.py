import pytest

from student_records.audit import AuditLog
from student_records.models import CourseRecord, StudentRecord
from student_records.store import RecordStore


def make_student(student_id="S1", name="Ann Lee", email="a@x.com", age="20", program="CS", password="pw1"):
    return StudentRecord(student_id, name, email, age, program, password)


def make_course(code="CS101", name="Intro", units="3"):
    return CourseRecord(code, name, units)


@pytest.fixture
def audit(tmp_path):
    log = AuditLog(str(tmp_path / "log.txt")).open()
    yield log
    log.close()


@pytest.fixture
def store(tmp_path, audit):
    return RecordStore(str(tmp_path), audit)


@pytest.fixture
def seeded_store(store):
    store.add_student(make_student())
    store.add_student(make_student("S2", "Bo Chan", "b@x.com", "22", "Math", "pw2"))
    store.add_course(make_course())
    store.add_course(make_course("MA201", "Calculus", "4"))
    return store
