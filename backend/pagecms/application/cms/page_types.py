from dataclasses import dataclass
from typing import Dict, Tuple, Type

from pagecms.models import (
    FaqContent,
    FaqPage,
    LandingContent,
    LandingPage,
    PartnerContent,
    PartnerPage,
)
from pagecms.domain.exceptions import NotFound


@dataclass(frozen=True)
class PageType:
    """
    Everything the versioning engine needs to know about one kind of page.
    """

    code: str
    page_model: Type
    content_model: Type
    preview_path: str
    # category type codes offered as list filters
    filter_category_codes: Tuple[str, ...] = ()
    notify_on_approval: bool = False

    @property
    def category_table(self):
        return self.content_model.CATEGORY_TABLE


FAQ = PageType(
    code="faq",
    page_model=FaqPage,
    content_model=FaqContent,
    preview_path="faq",
    filter_category_codes=("faq", "category-keywords"),
)

LANDING = PageType(
    code="landing",
    page_model=LandingPage,
    content_model=LandingContent,
    preview_path="landing",
    filter_category_codes=("landing", "category-keywords"),
    notify_on_approval=True,
)

PARTNER = PageType(
    code="partner",
    page_model=PartnerPage,
    content_model=PartnerContent,
    preview_path="partner",
    filter_category_codes=("partner", "category-keywords"),
    notify_on_approval=True,
)

PAGE_TYPES: Dict[str, PageType] = {pt.code: pt for pt in (FAQ, LANDING, PARTNER)}


def get_page_type(code: str) -> PageType:
    try:
        return PAGE_TYPES[code.lower()]
    except (KeyError, AttributeError):
        raise NotFound(f"Unknown page type: {code!r}")
