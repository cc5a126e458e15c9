from pagecms.extensions import db
from .base import BaseModel
from .enums import PublishStatus
from sqlalchemy import event


class Revision(BaseModel):
    __tablename__ = "revisions"

    # Exactly one owner column is set, depending on the page type.
    faq_content_id = db.Column(
        db.String(36), db.ForeignKey("faq_contents.id"), nullable=True, unique=True, index=True
    )
    landing_content_id = db.Column(
        db.String(36), db.ForeignKey("landing_contents.id"), nullable=True, unique=True, index=True
    )
    partner_content_id = db.Column(
        db.String(36), db.ForeignKey("partner_contents.id"), nullable=True, unique=True, index=True
    )

    publish_status = db.Column(
        db.String(20), nullable=False, default=PublishStatus.UNPUBLISHED.value
    )
    author = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=True)
    description = db.Column(db.Text, nullable=True)

    META_FIELDS = ("author", "message", "description", "publish_status")

    @property
    def content_id(self):
        return self.faq_content_id or self.landing_content_id or self.partner_content_id

    def meta(self):
        return {field: getattr(self, field) for field in self.META_FIELDS}


@event.listens_for(Revision, "before_update")
def prevent_revision_mutation(mapper, connection, target):
    raise RuntimeError("Revisions are immutable")
