from __future__ import annotations

from ..extensions import db
from storefront.time_utils import to_utc_z, utcnow


class Product(db.Model):
    """
    Product master data for the storefront catalog.

    ORDERING DESIGN DECISION:
    Product.id is an autoincrement integer and the CANONICAL tie-breaker for
    every listing order. Two products may share price, featured flag or
    created_at; they never share an id.

    created_at is assigned in Python (utcnow) rather than only by the database,
    so every stored timestamp carries the same precision and compares exactly
    against the value echoed back inside a pagination cursor.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.Index("ix_products_active_featured_created", "is_active", "featured", "created_at"),
        db.Index("ix_products_active_price", "is_active", "price_cents"),
        db.Index("ix_products_name", "name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    sku = db.Column(db.String(64), nullable=False, unique=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(1024), nullable=True)

    # Authoritative storage in cents (frontend may only format for display)
    price_cents = db.Column(db.Integer, nullable=True)
    stock = db.Column(db.Integer, nullable=True)

    is_active = db.Column(db.Boolean, nullable=False, default=True)
    featured = db.Column(db.Boolean, nullable=False, default=False)
    has_variants = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=db.func.now(),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=db.func.now(),
        onupdate=utcnow,
    )

    category_links = db.relationship(
        "ProductCategory",
        back_populates="product",
        cascade="all, delete-orphan",
        lazy=True,
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id} sku={self.sku!r} name={self.name!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sku": self.sku,
            "name": self.name,
            "description": self.description,
            "image_url": self.image_url,
            "price_cents": self.price_cents,
            "stock": self.stock,
            "is_active": self.is_active,
            "featured": self.featured,
            "has_variants": self.has_variants,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class Category(db.Model):
    __tablename__ = "categories"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=db.func.now(),
    )

    product_links = db.relationship(
        "ProductCategory",
        back_populates="category",
        cascade="all, delete-orphan",
        lazy=True,
    )

    def __repr__(self) -> str:
        return f"<Category id={self.id} slug={self.slug!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "is_active": self.is_active,
            "created_at": to_utc_z(self.created_at),
        }


class ProductCategory(db.Model):
    """
    Many-to-many link between products and categories.

    A product may have zero links (it is still listed when no category filter
    is active) or several (all are shown, once each).
    """
    __tablename__ = "product_categories"
    __table_args__ = (
        db.UniqueConstraint("category_id", "product_id", name="uq_product_categories_pair"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id = db.Column(
        db.Integer,
        db.ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=db.func.now(),
    )

    product = db.relationship("Product", back_populates="category_links")
    category = db.relationship("Category", back_populates="product_links")

    def __repr__(self) -> str:
        return f"<ProductCategory product_id={self.product_id} category_id={self.category_id}>"
