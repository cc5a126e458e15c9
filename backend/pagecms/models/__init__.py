from .base import BaseModel
from .enums import PageLanguage, PageMode, PublishStatus, WorkflowStatus
from .meta_tag import MetaTag
from .category import (
    Category,
    CategoryType,
    faq_content_categories,
    landing_content_categories,
    partner_content_categories,
)
from .revision import Revision
from .component import Component
from .content import ContentMixin, FaqContent, LandingContent, PartnerContent
from .page import FaqPage, LandingPage, PartnerPage
