from enum import Enum


class UserRole(str, Enum):
    RESIDENT = "Resident"
    HELPER = "Helper"


class RequestStatus(str, Enum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    IN_PROGRESS = "In-progress"
    COMPLETED = "Completed"


class Urgency(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


CATEGORIES = (
    "Groceries",
    "Home Repair",
    "Transportation",
    "Pet Care",
    "Gardening",
    "Tech Support",
    "Other",
)

CATEGORY_PATTERN = "^(" + "|".join(CATEGORIES) + ")$"
