from pagecms.extensions import db
from .base import BaseModel
from .enums import PublishStatus


class CategoryType(BaseModel):
    __tablename__ = "category_types"

    type_code = db.Column(db.String(100), nullable=False, unique=True, index=True)
    name = db.Column(db.String(255), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    categories = db.relationship(
        "Category",
        back_populates="category_type",
        order_by="Category.weight",
    )


class Category(BaseModel):
    __tablename__ = "categories"

    category_type_id = db.Column(
        db.String(36), db.ForeignKey("category_types.id"), nullable=False, index=True
    )
    language_code = db.Column(db.String(10), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    weight = db.Column(db.Integer, nullable=False, default=0)
    publish_status = db.Column(
        db.String(20), nullable=False, default=PublishStatus.UNPUBLISHED.value
    )

    category_type = db.relationship("CategoryType", back_populates="categories")

    __table_args__ = (
        db.UniqueConstraint(
            "category_type_id", "language_code", "name", name="uq_category_type_language_name"
        ),
    )


def content_category_table(name, content_table):
    """Join table linking one content table to the shared categories."""
    return db.Table(
        name,
        db.Column(
            "content_id",
            db.String(36),
            db.ForeignKey(f"{content_table}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        db.Column(
            "category_id",
            db.String(36),
            db.ForeignKey("categories.id"),
            primary_key=True,
        ),
    )


faq_content_categories = content_category_table("faq_content_categories", "faq_contents")
landing_content_categories = content_category_table("landing_content_categories", "landing_contents")
partner_content_categories = content_category_table("partner_content_categories", "partner_contents")
