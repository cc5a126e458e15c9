from pagecms.extensions import db
from .base import BaseModel


class MetaTag(BaseModel):
    __tablename__ = "meta_tags"

    title = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
    cover_image = db.Column(db.String(512), nullable=True)

    FIELDS = ("title", "description", "cover_image")

    def values(self):
        return {field: getattr(self, field) for field in self.FIELDS}
