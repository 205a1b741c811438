from enum import Enum


class UserRoleEnum(str, Enum):
    USER = "user"
    ADMIN = "admin"

class CourseLevelEnum(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

class NotificationTypeEnum(str, Enum):
    AUTH = "auth"
    EMAIL = "email"
    SYSTEM = "system"

class MediaKindEnum(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    OTHER = "other"

class AuditActionEnum(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    MOVE = "move"
    REORDER = "reorder"
    RESET_PROGRESS = "reset_progress"
    HIDE = "hide"
    RESTORE = "restore"
    SEND = "send"

OUT_OF_ORDER_ERROR = "out_of_order"
OUT_OF_ORDER_MESSAGE = "You must complete previous lessons before marking this one complete."
NOT_ENROLLED_MESSAGE = "You are not enrolled in this course."
MAX_POSITION_SECONDS = 2**31 - 1
SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
