# catalog_api/models/product.py
import enum
from datetime import datetime, timezone
import sqlalchemy as sa
from catalog_api.utils.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(str, enum.Enum):
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    FOOD = "Food"


class Product(Base):
    __tablename__ = "products"
    id = sa.Column(sa.String(36), primary_key=True)
    name = sa.Column(sa.String(255), nullable=False)
    description = sa.Column(sa.Text, nullable=True)
    price = sa.Column(sa.Float, nullable=False)
    category = sa.Column(
        sa.Enum(Category, values_callable=lambda e: [c.value for c in e], native_enum=False, length=32),
        nullable=False,
    )
    url = sa.Column(sa.String(1024), nullable=True)
    stock = sa.Column(sa.String(255), nullable=False)
    size = sa.Column(sa.String(255), nullable=False)
    composition = sa.Column(sa.String(255), nullable=False)
    color = sa.Column(sa.String(255), nullable=False)
    weight = sa.Column(sa.String(255), nullable=False)
    images = sa.Column(sa.Text, nullable=False)
    # no FK here: campaigns.product_id already points back, and a cycle would
    # make the pair impossible to insert in one transaction
    campaign_id = sa.Column(sa.String(36), nullable=False, index=True)
    deleted = sa.Column(sa.Boolean, nullable=False, default=False)
    created_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=utcnow)


class Campaign(Base):
    __tablename__ = "campaigns"
    id = sa.Column(sa.String(36), primary_key=True)
    product_id = sa.Column(sa.String(36), sa.ForeignKey("products.id"), nullable=False, index=True)
    name = sa.Column(sa.String(255), nullable=False)
    description = sa.Column(sa.Text, nullable=True)
    amount = sa.Column(sa.Float, nullable=False)
    percentage = sa.Column(sa.String(32), nullable=False)
    created_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=utcnow)
