from enum import Enum


class PageLanguage(str, Enum):
    TH = "th"
    EN = "en"


class PageMode(str, Enum):
    PUBLISHED = "Published"
    HISTORIES = "Histories"
    PREVIEW = "Preview"


class PublishStatus(str, Enum):
    UNPUBLISHED = "UnPublished"
    PUBLISHED = "Published"


class WorkflowStatus(str, Enum):
    DRAFT = "Draft"
    APPROVAL_PENDING = "Approval_Pending"
    WAITING_DESIGN_APPROVED = "Waiting_Design_Approved"
    SCHEDULE = "Schedule"
    PUBLISHED = "Published"
    UNPUBLISHED = "UnPublished"
    WAITING_DELETION = "Waiting_Deletion"
    DELETE = "Delete"
