from sqlalchemy import event
from sqlalchemy.orm import declared_attr
from pagecms.extensions import db
from .base import BaseModel
from .enums import PageMode, PublishStatus, WorkflowStatus
from .category import (
    faq_content_categories,
    landing_content_categories,
    partner_content_categories,
)


class ContentMixin:
    """
    One localized, mode-tagged body of a page.

    Subclasses declare where they live:
    - PAGE_TABLE: table of the owning page
    - OWNER_KEY: owner column on Revision / Component
    - CATEGORY_TABLE: join table to Category
    - TYPE_FIELDS: per-type scalar fields copied on revert/duplicate
    """

    PAGE_TABLE = None
    OWNER_KEY = None
    CATEGORY_TABLE = None

    BASE_FIELDS = (
        "title",
        "language",
        "url_alias",
        "html_input",
        "workflow_status",
        "publish_status",
        "publish_on",
        "unpublish_on",
        "authored_on",
        "authored_at",
        "expired_at",
    )
    TYPE_FIELDS = ()
    DATETIME_FIELDS = ("publish_on", "unpublish_on", "authored_on", "authored_at", "expired_at")

    language = db.Column(db.String(10), nullable=False, index=True)
    mode = db.Column(db.String(20), nullable=False, default=PageMode.PUBLISHED.value, index=True)
    title = db.Column(db.String(255), nullable=False)
    url_alias = db.Column(db.String(512), nullable=False, default="", index=True)
    html_input = db.Column(db.Text, nullable=True)
    workflow_status = db.Column(db.String(50), nullable=False, default=WorkflowStatus.DRAFT.value)
    publish_status = db.Column(db.String(20), nullable=False, default=PublishStatus.UNPUBLISHED.value)
    publish_on = db.Column(db.DateTime(timezone=True), nullable=True)
    unpublish_on = db.Column(db.DateTime(timezone=True), nullable=True)
    authored_on = db.Column(db.DateTime(timezone=True), nullable=True)
    authored_at = db.Column(db.DateTime(timezone=True), nullable=True)
    expired_at = db.Column(db.DateTime(timezone=True), nullable=True)

    @declared_attr
    def page_id(cls):
        return db.Column(
            db.String(36), db.ForeignKey(f"{cls.PAGE_TABLE}.id"), nullable=False, index=True
        )

    @declared_attr
    def meta_tag_id(cls):
        return db.Column(db.String(36), db.ForeignKey("meta_tags.id"), nullable=True, unique=True)

    @declared_attr
    def meta_tag(cls):
        return db.relationship("MetaTag", cascade="all, delete-orphan", single_parent=True)

    @declared_attr
    def revision(cls):
        return db.relationship(
            "Revision",
            uselist=False,
            foreign_keys=f"Revision.{cls.OWNER_KEY}",
            cascade="all, delete-orphan",
        )

    @declared_attr
    def components(cls):
        return db.relationship(
            "Component",
            foreign_keys=f"Component.{cls.OWNER_KEY}",
            order_by="Component.position",
            cascade="all, delete-orphan",
        )

    @declared_attr
    def categories(cls):
        return db.relationship("Category", secondary=cls.CATEGORY_TABLE, order_by="Category.weight")

    @classmethod
    def body_fields(cls):
        return cls.BASE_FIELDS + cls.TYPE_FIELDS

    @classmethod
    def has_url(cls):
        return "url" in cls.TYPE_FIELDS

    def body(self):
        return {field: getattr(self, field) for field in self.body_fields()}

    @property
    def is_preview(self):
        return self.mode == PageMode.PREVIEW.value


class FaqContent(BaseModel, ContentMixin):
    __tablename__ = "faq_contents"

    PAGE_TABLE = "faq_pages"
    OWNER_KEY = "faq_content_id"
    CATEGORY_TABLE = faq_content_categories
    TYPE_FIELDS = ("url",)

    url = db.Column(db.String(512), nullable=False, index=True)

    page = db.relationship("FaqPage", back_populates="contents")


class LandingContent(BaseModel, ContentMixin):
    __tablename__ = "landing_contents"

    PAGE_TABLE = "landing_pages"
    OWNER_KEY = "landing_content_id"
    CATEGORY_TABLE = landing_content_categories
    TYPE_FIELDS = ("approval_email",)

    approval_email = db.Column(db.JSON, default=list)

    page = db.relationship("LandingPage", back_populates="contents")


class PartnerContent(BaseModel, ContentMixin):
    __tablename__ = "partner_contents"

    PAGE_TABLE = "partner_pages"
    OWNER_KEY = "partner_content_id"
    CATEGORY_TABLE = partner_content_categories
    TYPE_FIELDS = (
        "url",
        "thumbnail_image",
        "thumbnail_alt_text",
        "company_logo",
        "company_alt_text",
        "company_name",
        "company_detail",
        "lead_body",
        "challenges",
        "solutions",
        "results",
        "is_recommended",
        "approval_email",
    )

    url = db.Column(db.String(512), nullable=False, index=True)
    thumbnail_image = db.Column(db.String(512), nullable=True)
    thumbnail_alt_text = db.Column(db.String(255), nullable=True)
    company_logo = db.Column(db.String(512), nullable=True)
    company_alt_text = db.Column(db.String(255), nullable=True)
    company_name = db.Column(db.String(255), nullable=True)
    company_detail = db.Column(db.Text, nullable=True)
    lead_body = db.Column(db.Text, nullable=True)
    challenges = db.Column(db.Text, nullable=True)
    solutions = db.Column(db.Text, nullable=True)
    results = db.Column(db.Text, nullable=True)
    is_recommended = db.Column(db.Boolean, nullable=False, default=False)
    approval_email = db.Column(db.JSON, default=list)

    page = db.relationship("PartnerPage", back_populates="contents")


MUTABLE_VERSIONED_COLUMNS = {"mode", "updated_at"}


@event.listens_for(ContentMixin, "before_update", propagate=True)
def prevent_content_mutation(mapper, connection, target):
    # Preview rows are scratch space; everything else may only change mode.
    if target.is_preview:
        return

    state = db.inspect(target)
    changed = {
        prop.key
        for prop in mapper.column_attrs
        if state.attrs[prop.key].history.has_changes()
    }
    forbidden = changed - MUTABLE_VERSIONED_COLUMNS
    if forbidden:
        raise RuntimeError(
            f"Versioned content is immutable; attempted to change {sorted(forbidden)}"
        )
