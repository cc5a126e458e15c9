from pagecms.extensions import db
from .base import BaseModel


class FaqPage(BaseModel):
    __tablename__ = "faq_pages"

    contents = db.relationship(
        "FaqContent",
        back_populates="page",
        order_by="FaqContent.created_at.desc()",
        cascade="all, delete-orphan",
    )


class LandingPage(BaseModel):
    __tablename__ = "landing_pages"

    contents = db.relationship(
        "LandingContent",
        back_populates="page",
        order_by="LandingContent.created_at.desc()",
        cascade="all, delete-orphan",
    )


class PartnerPage(BaseModel):
    __tablename__ = "partner_pages"

    contents = db.relationship(
        "PartnerContent",
        back_populates="page",
        order_by="PartnerContent.created_at.desc()",
        cascade="all, delete-orphan",
    )
