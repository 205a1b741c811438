# Imports every model so Base.metadata and relationship() strings resolve.
# Imported by main.py, migrations and the test suite.

from app.core.database import Base
from app.models.user import User
from app.models.course import Course
from app.models.lesson import Lesson
from app.models.course_enrollment import CourseEnrollment
from app.models.lesson_progress import LessonProgress
from app.models.lesson_note import LessonNote
from app.models.notification import Notification
from app.models.audit_log import AuditLog
from app.models.token_denylist import TokenDenylist
from app.models.media import Media

__all__ = [
    "Base",
    "User",
    "Course",
    "Lesson",
    "CourseEnrollment",
    "LessonProgress",
    "LessonNote",
    "Notification",
    "AuditLog",
    "TokenDenylist",
    "Media",
]
