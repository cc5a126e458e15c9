from pagecms.extensions import db
from .base import BaseModel


class Component(BaseModel):
    __tablename__ = "components"

    faq_content_id = db.Column(db.String(36), db.ForeignKey("faq_contents.id"), nullable=True, index=True)
    landing_content_id = db.Column(db.String(36), db.ForeignKey("landing_contents.id"), nullable=True, index=True)
    partner_content_id = db.Column(db.String(36), db.ForeignKey("partner_contents.id"), nullable=True, index=True)

    type = db.Column(db.String(100), nullable=False)  # LeadComponent, Divider, Box, ...
    position = db.Column(db.Integer, nullable=False, default=1)
    props = db.Column(db.JSON, default=dict)
