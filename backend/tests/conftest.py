"""
Pytest fixtures for storefront backend tests.

Provides an in-memory database, a test client and small catalog factories.
"""

from datetime import datetime, timedelta

import pytest
from storefront import create_app
from storefront.extensions import db
from storefront.models import Product, Category, ProductCategory


BASE_TIME = datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def make_product(db_session):
    """Factory: make_product(name=..., price_cents=..., ...) -> committed Product."""
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        n = counter["n"]
        fields.setdefault("sku", f"SKU-{n:04d}")
        fields.setdefault("name", f"Product {n:03d}")
        fields.setdefault("price_cents", 1000)
        fields.setdefault("stock", 5)
        fields.setdefault("is_active", True)
        fields.setdefault("featured", False)
        fields.setdefault("has_variants", False)
        fields.setdefault("created_at", BASE_TIME + timedelta(minutes=n))
        product = Product(**fields)
        db_session.add(product)
        db_session.commit()
        return product

    return _make


@pytest.fixture(scope='function')
def make_category(db_session):
    counter = {"n": 0}

    def _make(name=None, **fields):
        counter["n"] += 1
        n = counter["n"]
        category = Category(
            name=name or f"Category {n}",
            slug=fields.pop("slug", f"category-{n}"),
            **fields,
        )
        db_session.add(category)
        db_session.commit()
        return category

    return _make


@pytest.fixture(scope='function')
def link(db_session):
    """link(product, category) -> ProductCategory"""
    def _link(product, category):
        row = ProductCategory(product_id=product.id, category_id=category.id)
        db_session.add(row)
        db_session.commit()
        return row

    return _link


@pytest.fixture(scope='function')
def tied_catalog(make_product):
    """
    24 products with ties on every leading sort key.

    - price cycles through 3 values, every 5th price is NULL
    - featured alternates in runs of two
    - created_at shared by groups of three
    - stock cycles through 0..3, every 7th is NULL
    - every 6th product is inactive
    """
    products = []
    for i in range(24):
        products.append(make_product(
            name=f"Item {i % 4}",
            price_cents=None if i % 5 == 4 else 100 * (i % 3 + 1),
            stock=None if i % 7 == 6 else i % 4,
            featured=(i // 2) % 2 == 0,
            is_active=(i % 6 != 5),
            has_variants=(i % 2 == 0),
            created_at=BASE_TIME + timedelta(hours=i // 3),
        ))
    return products


@pytest.fixture
def paginate():
    """paginate(fetch) follows nextCursor until exhausted; fetch(cursor) -> page dict."""
    return collect_pages


def collect_pages(fetch, *, max_pages=100):
    pages = []
    cursor = None
    for _ in range(max_pages):
        page = fetch(cursor)
        pages.append(page)
        cursor = page["nextCursor"]
        if cursor is None:
            return pages
    raise AssertionError("pagination did not terminate")
