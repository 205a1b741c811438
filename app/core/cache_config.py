"""Cache TTL settings (seconds) for cached read endpoints."""

CACHE_TTL = {
    # Learner progress - invalidated on every save, short TTL as a backstop
    "course_progress": 120,
    "lesson_states": 120,
    "learning_progress": 120,
    "my_enrollments": 120,

    # Notifications - polled by the header bell
    "notifications": 60,
    "unread_count": 30,

    # Public catalog
    "course_list": 300,
}
