"""
Append-only audit trail of user actions.

Each line reads ``[Mon Oct 19 19:26:00 2026] Student S1 enrolled in CS101``.
"""
import logging

AUDIT_FORMAT = '[%(asctime)s] %(message)s'
AUDIT_DATEFMT = '%a %b %d %H:%M:%S %Y'
AUDIT_LOGGER = "student_records.audit"


class AuditLog:
    """
    Owns the audit file for the lifetime of the process.

    The file is opened by open() and released by close(); logging's
    FileHandler flushes after every record. Instances share one named
    logger and each attaches only its own handler while open.
    """

    def __init__(self, path):
        self.path = path
        self.logger = logging.getLogger(AUDIT_LOGGER)
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False
        self._handler = None

    def open(self):
        if self._handler is None:
            self._handler = logging.FileHandler(self.path, mode='a', encoding='utf-8')
            self._handler.setFormatter(logging.Formatter(AUDIT_FORMAT, datefmt=AUDIT_DATEFMT))
            self.logger.addHandler(self._handler)
        return self

    def record(self, event):
        if self._handler is None:
            raise RuntimeError("Audit log is not open")
        self.logger.info(event)

    def close(self):
        if self._handler is not None:
            self.logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
