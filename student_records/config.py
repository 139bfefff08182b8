"""
Runtime settings for the student records CLI.

Every value can be overridden through an environment variable so the same
install can point at different data directories.
"""
import os

DATA_DIR = os.getenv('STUDENT_RECORDS_DATA_DIR', os.getcwd())

STUDENTS_FILE = "students.txt"
COURSES_FILE = "courses.txt"
ENROLLMENTS_FILE = "enrollments.txt"

# Admin credentials
ADMIN_USERNAME = os.getenv('STUDENT_RECORDS_ADMIN_USER', "admin")
ADMIN_PASSWORD = os.getenv('STUDENT_RECORDS_ADMIN_PASSWORD', "admin123")

AUDIT_LOG_FILE = os.getenv('STUDENT_RECORDS_AUDIT_LOG', os.path.join(DATA_DIR, "log.txt"))
APP_LOG_FILE = os.getenv('STUDENT_RECORDS_APP_LOG', "student_records.log")

# "table", "summary", or empty to ask on first view
DISPLAY_MODE = os.getenv('STUDENT_RECORDS_DISPLAY_MODE', "").strip().lower()
