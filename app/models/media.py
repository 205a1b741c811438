from sqlalchemy import BigInteger, Column, Integer, String, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.constants import MediaKindEnum

class Media(Base):
    """An uploaded asset registered after the client finished uploading it to storage."""
    __tablename__ = "media"

    id = Column(Integer, primary_key=True, index=True)
    kind = Column(Enum(MediaKindEnum), nullable=False, default=MediaKindEnum.OTHER)
    key = Column(String, nullable=False, index=True)
    url = Column(String, nullable=True)
    mime = Column(String, nullable=True)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    size_bytes = Column(BigInteger, nullable=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="SET NULL"), nullable=True, index=True)
    lesson_id = Column(Integer, ForeignKey("lessons.id", ondelete="SET NULL"), nullable=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    course = relationship("Course")
    lesson = relationship("Lesson")
    user = relationship("User")
