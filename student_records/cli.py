"""
Interactive console for the student records system.

An admin manages students and courses; a student manages their own profile
and enrollments. All reads and writes go through RecordStore.
"""
import getpass
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import config
from .audit import AuditLog
from .display import (
    DisplayMode,
    render_course_line,
    render_courses,
    render_enrolled_courses,
    render_profile,
    render_students,
)
from .errors import (
    DuplicateEnrollmentError,
    DuplicateKeyError,
    NotFoundError,
    StorageIOError,
    ValidationError,
)
from .models import CourseRecord, StudentRecord
from .store import RecordStore
from .validators import equals_ignore_case, validate_course_field, validate_student_field

logger = logging.getLogger(__name__)

SEPARATOR = "------------------------------------------------------"


class Role(Enum):
    ADMIN = "admin"
    STUDENT = "student"


@dataclass
class Session:
    role: Role
    user_id: str
    display_mode: Optional[DisplayMode] = None


def authenticate(store, username, password, admin_username=None, admin_password=None):
    """
    Returns a Session for the admin or for the student whose id matches
    username (any case) and whose password matches exactly, else None.
    """
    admin_username = config.ADMIN_USERNAME if admin_username is None else admin_username
    admin_password = config.ADMIN_PASSWORD if admin_password is None else admin_password
    if username == admin_username and password == admin_password:
        return Session(Role.ADMIN, admin_username)

    for student in store.all_students():
        if equals_ignore_case(student.id, username.strip()) and student.password == password:
            return Session(Role.STUDENT, student.id)
    return None


def prompt(text):
    return input(f"[+] {text}").strip()


def prompt_field(text, check, field, allow_empty=False):
    """
    Asks for one field until check(field, value) passes.
    With allow_empty, a blank answer is returned as-is (keep current value).
    """
    while True:
        value = prompt(text)
        if allow_empty and not value:
            return value
        is_valid, error = check(field, value)
        if is_valid:
            return value
        print(f"[+] {error}")
        logger.warning(f"Rejected {field} input: {error}")


def prompt_existing(text, exists, not_found):
    while True:
        value = prompt(text)
        if exists(value):
            return value
        print(f"[+] {not_found}")


def confirm(text):
    return prompt(f"{text} (y/n): ").lower() == 'y'


def choose_display_mode(store, session):
    """
    Lets the user pick Table or Summary output for the rest of the session.
    """
    while True:
        print("\n[+] Choose display format:")
        print("1. Table View")
        print("2. Summary View")
        mode = DisplayMode.from_choice(prompt("Select option: "))
        if mode is not None:
            session.display_mode = mode
            logger.info(f"Display mode set to {mode.value} for {session.user_id}")
            return mode
        print("[+] Invalid input. Please enter 1 or 2 only.")


def _display_mode(store, session):
    if session.display_mode is None:
        choose_display_mode(store, session)
    return session.display_mode


# --- Admin workflows ---

def add_student(store, session):
    print("\n[+] Add Student")
    print(SEPARATOR)
    while True:
        student_id = prompt_field("Enter Student ID: ", validate_student_field, "id")
        if not store.student_exists(student_id):
            break
        print("[+] Student ID already exists.")

    name = prompt_field("Enter Name: ", validate_student_field, "name")
    email = prompt("Enter Email: ")
    age = prompt_field("Enter Age: ", validate_student_field, "age")
    program = prompt("Enter Program: ")
    password = prompt("Enter Password: ")

    try:
        record = store.add_student(StudentRecord(student_id, name, email, age, program, password))
    except (ValidationError, DuplicateKeyError) as err:
        print(f"[+] Error: {err}")
        logger.warning(f"Failed to add student {student_id}: {err}")
        return
    print(f"[+] Student {record.id} added.")


def add_course(store, session):
    print("\n[+] Add Course")
    print(SEPARATOR)
    while True:
        code = prompt_field("Enter Course Code: ", validate_course_field, "code")
        if not store.course_exists(code):
            break
        print("[+] Course code already exists (case-insensitive).")

    name = prompt("Enter Course Name: ")
    units = prompt_field("Enter Units: ", validate_course_field, "units")

    try:
        record = store.add_course(CourseRecord(code, name, units))
    except (ValidationError, DuplicateKeyError) as err:
        print(f"[+] Error: {err}")
        logger.warning(f"Failed to add course {code}: {err}")
        return
    print(f"[+] Course {record.code} added.")


def view_all_students(store, session):
    mode = _display_mode(store, session)
    students = store.all_students()
    print()
    print(render_students(students, mode))
    if not students:
        print("[+] No students found.")


def view_all_courses(store, session):
    mode = _display_mode(store, session)
    courses = store.all_courses()
    print()
    print(render_courses(courses, mode))
    if not courses:
        print("[+] No courses found.")


def view_students_per_course(store, session):
    if not store.all_courses():
        print("[+] No courses found.")
        return
    while True:
        code = prompt("Enter Course Code: ")
        try:
            students = store.list_by_course(code)
        except NotFoundError:
            print("[+] Course not found. Please try again.")
            continue
        break

    print(f"[+] Students enrolled in {code}:")
    if not students:
        print("[+] No students enrolled in this course.")
    for student in students:
        print(f"{student.id} - {student.name}")


def edit_student(store, session):
    print("\n[+] Edit Student")
    print(SEPARATOR)
    if not store.all_students():
        print("[+] No students found.")
        return
    student_id = prompt_existing(
        "Enter Student ID to edit: ",
        store.student_exists,
        "Student not found (not case sensitive). Please try again.",
    )
    record = store.find_student(student_id)
    print("[+] Press Enter to keep the current value.")
    updates = {
        "name": prompt_field(f"Edit Name ({record.name}): ", validate_student_field, "name", allow_empty=True),
        "email": prompt(f"Edit Email ({record.email}): "),
        "age": prompt_field(f"Edit Age ({record.age}): ", validate_student_field, "age", allow_empty=True),
        "program": prompt(f"Edit Program ({record.program}): "),
    }
    try:
        store.update_student(record.id, updates)
    except (ValidationError, NotFoundError) as err:
        print(f"[+] Error: {err}")
        logger.warning(f"Failed to edit student {record.id}: {err}")
        return
    print("[+] Student updated.")


def edit_course(store, session):
    print("\n[+] Edit Course")
    print(SEPARATOR)
    if not store.all_courses():
        print("[+] No courses found.")
        return
    code = prompt_existing(
        "Enter Course Code to edit: ",
        store.course_exists,
        "Course not found (not case sensitive). Please try again.",
    )
    record = store.find_course(code)
    print("[+] Press Enter to keep the current value.")
    updates = {
        "name": prompt(f"Edit Name ({record.name}): "),
        "units": prompt_field(f"Edit Units ({record.units}): ", validate_course_field, "units", allow_empty=True),
    }
    try:
        store.update_course(record.code, updates)
    except (ValidationError, NotFoundError) as err:
        print(f"[+] Error: {err}")
        logger.warning(f"Failed to edit course {record.code}: {err}")
        return
    print("[+] Course updated.")


def delete_student(store, session):
    print("\n[+] Delete Student")
    print(SEPARATOR)
    if not store.all_students():
        print("[+] No students found.")
        return
    student_id = prompt_existing(
        "Enter Student ID to delete: ",
        store.student_exists,
        "Student not found (not case sensitive). Please try again.",
    )
    if not confirm(f"Delete student {student_id} and all their enrollments?"):
        print("[+] Deletion cancelled.")
        logger.info(f"Deletion cancelled for student ID: {student_id}")
        return
    store.delete_student(student_id)
    print("[+] Student deleted.")


def delete_course(store, session):
    print("\n[+] Delete Course")
    print(SEPARATOR)
    if not store.all_courses():
        print("[+] No courses found.")
        return
    code = prompt_existing(
        "Enter Course Code to delete: ",
        store.course_exists,
        "Course not found (not case sensitive). Please try again.",
    )
    if not confirm(f"Delete course {code} and all its enrollments?"):
        print("[+] Deletion cancelled.")
        logger.info(f"Deletion cancelled for course: {code}")
        return
    store.delete_course(code)
    print("[+] Course deleted.")


# --- Student workflows ---

def view_profile(store, session):
    record = store.find_student(session.user_id)
    if record is None:
        print("[+] Profile not found.")
        return
    print()
    print(render_profile(record))


def enroll_in_course(store, session):
    courses = store.all_courses()
    if not courses:
        print("[+] No courses available.")
        return
    if all(store.is_enrolled(session.user_id, c.code) for c in courses):
        print("[+] You are already enrolled in every available course.")
        return

    print("[+] Available courses:")
    for course in courses:
        print(render_course_line(course))

    while True:
        code = prompt("Enter Course Code to enroll: ")
        try:
            store.enroll(session.user_id, code)
        except NotFoundError:
            print("[+] Course not found (not case sensitive). Please try again.")
        except DuplicateEnrollmentError:
            print("[+] You are already enrolled in this course. Please choose another course.")
        else:
            print("[+] Enrolled in course.")
            return


def view_enrolled_courses(store, session):
    print("[+] Enrolled courses:")
    print(render_enrolled_courses(store.list_by_student(session.user_id)))


def edit_profile(store, session):
    record = store.find_student(session.user_id)
    if record is None:
        print("[+] Profile not found.")
        return
    print("[+] Press Enter to keep the current value.")
    updates = {
        "name": prompt_field(f"Edit Name ({record.name}): ", validate_student_field, "name", allow_empty=True),
        "email": prompt(f"Edit Email ({record.email}): "),
        "age": prompt_field(f"Edit Age ({record.age}): ", validate_student_field, "age", allow_empty=True),
    }
    try:
        store.update_student(record.id, updates)
    except (ValidationError, NotFoundError) as err:
        print(f"[+] Error: {err}")
        logger.warning(f"Failed to edit profile {record.id}: {err}")
        return
    print("[+] Profile updated.")


def drop_course(store, session):
    if not store.list_by_student(session.user_id):
        print("[+] You are not enrolled in any course.")
        return
    while True:
        code = prompt("Enter Course Code to drop: ")
        if not store.course_exists(code):
            print("[+] Course not found (not case sensitive). Please try again.")
            continue
        try:
            store.drop(session.user_id, code)
        except NotFoundError:
            print("[+] Not enrolled in this course.")
            continue
        print("[+] Dropped course.")
        return


# A handler of None ends the session.
ADMIN_OPTIONS = [
    ("Add Student", add_student),
    ("Add Course", add_course),
    ("View All Students", view_all_students),
    ("View All Courses", view_all_courses),
    ("View Students per Course", view_students_per_course),
    ("Edit Student", edit_student),
    ("Edit Course", edit_course),
    ("Delete Student", delete_student),
    ("Delete Course", delete_course),
    ("Change Display Mode", choose_display_mode),
    ("Logout", None),
]

STUDENT_OPTIONS = [
    ("View Profile", view_profile),
    ("Enroll in Course", enroll_in_course),
    ("View Enrolled Courses", view_enrolled_courses),
    ("Edit Profile", edit_profile),
    ("Drop Course", drop_course),
    ("Change Display Mode", choose_display_mode),
    ("Logout", None),
]


def menu_options(role):
    if role is Role.ADMIN:
        return ADMIN_OPTIONS
    if role is Role.STUDENT:
        return STUDENT_OPTIONS
    raise ValueError(f"Unknown role: {role}")


def show_menu(role):
    """
    Displays the numbered menu for the given role.
    """
    title = "Admin Menu" if role is Role.ADMIN else "Student Menu"
    print(f"\n[+] {title}")
    print(SEPARATOR)
    for number, (label, _) in enumerate(menu_options(role), 1):
        print(f"{number}. {label}")
    print(SEPARATOR)


def parse_menu_choice(text, count):
    """
    Returns the option number for digits-only text within 1..count, else None.
    """
    if not text or not text.isascii() or not text.isdigit():
        return None
    choice = int(text)
    if not 1 <= choice <= count:
        return None
    return choice


def run_session(store, session, audit=None):
    """
    Runs the role menu until the user logs out.
    """
    options = menu_options(session.role)
    while True:
        show_menu(session.role)
        text = prompt("Select option: ")
        choice = parse_menu_choice(text, len(options))
        if choice is None:
            print(f"[+] Invalid input. Please enter a number from 1 to {len(options)} only.")
            logger.warning(f"Invalid {session.role.value} menu choice: {text}")
            continue

        label, handler = options[choice - 1]
        if handler is None:
            event = "Admin logged out" if session.role is Role.ADMIN else f"Student {session.user_id} logged out"
            logger.info(event)
            if audit is not None:
                audit.record(event)
            print("[+] Logged out.")
            return
        handler(store, session)


def login(store, audit=None):
    """
    Prompts for credentials until they match the admin or a student.
    """
    while True:
        print("\n[+] Login")
        print(SEPARATOR)
        username = prompt("Username (admin or student ID): ")
        password = getpass.getpass("[+] Password: ")
        session = authenticate(store, username, password)
        if session is not None:
            event = "Admin logged in" if session.role is Role.ADMIN else f"Student {session.user_id} logged in"
            logger.info(event)
            if audit is not None:
                audit.record(event)
            print("[+] Login successful.")
            return session
        print("[+] Login failed: Invalid credentials. Try again.")
        logger.warning(f"Failed login attempt for username: {username}")


def run(store, audit=None, default_mode=None):
    """
    Main screen loop: log in, run the role menu, repeat until Exit.
    """
    while True:
        print("\n[+] Student Records CLI")
        print(SEPARATOR)
        print("1. Login")
        print("2. Exit")
        print(SEPARATOR)
        choice = prompt("Enter choice (1 or 2): ")

        if choice == "1":
            session = login(store, audit)
            session.display_mode = default_mode
            run_session(store, session, audit)
        elif choice == "2":
            print("[+] Goodbye!")
            logger.info("Program exited normally")
            return
        else:
            print("[+] Invalid choice. Please select 1 (Login) or 2 (Exit).")
            logger.warning(f"Invalid main menu choice: {choice}")


def main():
    """
    Entry point: sets up logging and the audit file, then runs the console.
    Returns the process exit status.
    """
    logging.basicConfig(
        filename=config.APP_LOG_FILE,
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    audit = AuditLog(config.AUDIT_LOG_FILE)
    try:
        audit.open()
        store = RecordStore(config.DATA_DIR, audit)
        run(store, audit, DisplayMode.from_name(config.DISPLAY_MODE))
    except (KeyboardInterrupt, EOFError):
        print("\n[+] Program terminated by user.")
        logger.info("Program terminated by user")
    except StorageIOError as err:
        print(f"[+] Storage error: {err}")
        logger.error(f"Storage failure, exiting: {err}")
        return 1
    except OSError as err:
        print(f"[+] Error: Cannot open audit log: {err}")
        logger.error(f"Cannot open audit log {config.AUDIT_LOG_FILE}: {err}")
        return 1
    finally:
        audit.close()
    return 0
