from sqlalchemy import Column, Integer, ForeignKey, DateTime, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class LessonNote(Base):
    __tablename__ = "lesson_notes"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", "lesson_id", name="uq_lesson_notes_user_course_lesson"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    lesson_id = Column(Integer, ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False, default="")
    deleted_at = Column(DateTime(timezone=True), nullable=True)  # set by moderation
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User")
    course = relationship("Course")
    lesson = relationship("Lesson", back_populates="notes")
