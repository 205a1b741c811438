from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.constants import CourseLevelEnum

class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String, unique=True, index=True, nullable=False)
    title = Column(String, index=True, nullable=False)
    description = Column(String, nullable=True)
    level = Column(Enum(CourseLevelEnum), nullable=True)
    published = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    lessons = relationship(
        "Lesson",
        back_populates="course",
        order_by="Lesson.index",
        cascade="all, delete-orphan",
    )
    enrollments = relationship("CourseEnrollment", back_populates="course", cascade="all, delete-orphan")

    @property
    def lesson_count(self) -> int:
        return len(self.lessons)
