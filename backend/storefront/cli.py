# Overview: Flask CLI command groups for catalog seeding, inspection, and maintenance.

# backend/storefront/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to storefront (PowerShell: $env:FLASK_APP="storefront").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Catalog:
# - python -m flask catalog seed --count 40 --categories 4
#   Create demo categories and products (with deliberate ties on price,
#   featured flag and creation time).
# - python -m flask catalog list --role customer --sort featured --limit 12
#   Print one page of the listing.
# - python -m flask catalog list --role admin --sort-by price --order desc --all
#   Follow nextCursor until the listing is exhausted.

import click
from datetime import datetime, timedelta
from flask.cli import with_appcontext

from .extensions import db
from .models import Product, Category, ProductCategory
from .catalog import (
    AdminFilters,
    AdminSortField,
    CatalogQueryFailed,
    CustomerFilters,
    CustomerSort,
    Role,
    SortDirection,
)
from .services.products_service import list_products
from .validation import ValidationError


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask catalog seed' to add demo data.")


@click.group('catalog')
def catalog_group():
    """Catalog seeding and listing commands."""


def build_demo_catalog(count: int, category_count: int, *, base_time: datetime) -> tuple[list, list]:
    """
    Demo rows with ties on every leading sort key.

    - prices cycle through five values (and every 7th product has no price)
    - every 3rd product is featured
    - products are created in pairs sharing one timestamp
    - every 4th product is out of stock, every 9th has unknown stock
    - every 10th product is inactive
    """
    categories = [
        Category(name=f"Category {n + 1}", slug=f"category-{n + 1}", is_active=True)
        for n in range(category_count)
    ]

    products = []
    for i in range(count):
        stock = 10 + i
        if i % 4 == 3:
            stock = 0
        if i % 9 == 8:
            stock = None
        products.append(
            Product(
                sku=f"DEMO-{i + 1:04d}",
                name=f"Demo Product {i + 1:03d}",
                description=f"Demo product number {i + 1}",
                price_cents=None if i % 7 == 6 else 500 * (i % 5 + 1),
                stock=stock,
                is_active=(i % 10 != 9),
                featured=(i % 3 == 0),
                has_variants=(i % 6 == 0),
                created_at=base_time + timedelta(hours=i // 2),
            )
        )
    return categories, products


@catalog_group.command('seed')
@click.option('--count', default=40, show_default=True, help='Number of products')
@click.option('--categories', 'category_count', default=4, show_default=True, help='Number of categories')
@click.option('--yes', is_flag=True, help='Seed even if products already exist')
@with_appcontext
def seed_catalog(count, category_count, yes):
    """Create demo categories and products."""
    existing = db.session.query(Product).count()
    if existing and not yes:
        click.echo(f"WARN {existing} products already exist. Re-run with --yes to add more.")
        return

    offset = db.session.query(Category).count()
    categories, products = build_demo_catalog(
        count, category_count, base_time=datetime(2026, 1, 1, 9, 0, 0)
    )
    for n, category in enumerate(categories):
        category.slug = f"category-{offset + n + 1}"
        category.name = f"Category {offset + n + 1}"
    if existing:
        for product in products:
            product.sku = f"{product.sku}-{existing}"

    db.session.add_all(categories)
    db.session.add_all(products)
    db.session.flush()

    link_count = 0
    if categories:
        for i, product in enumerate(products):
            if i % 5 == 4:
                continue  # uncategorized
            primary = categories[i % len(categories)]
            db.session.add(ProductCategory(product_id=product.id, category_id=primary.id))
            link_count += 1
            if i % 2 == 0 and len(categories) > 1:
                secondary = categories[(i + 1) % len(categories)]
                db.session.add(ProductCategory(product_id=product.id, category_id=secondary.id))
                link_count += 1

    db.session.commit()
    click.echo(
        f"PASS Created {len(products)} products, {len(categories)} categories, "
        f"{link_count} category links"
    )


@catalog_group.command('list')
@click.option('--role', type=click.Choice(Role.ALL), default=Role.CUSTOMER, show_default=True)
@click.option('--sort', 'sort_order', type=click.Choice(CustomerSort.ALL), default=CustomerSort.DEFAULT,
              show_default=True, help='Customer sort order')
@click.option('--sort-by', type=click.Choice(AdminSortField.ALL), default=AdminSortField.DEFAULT,
              show_default=True, help='Admin sort field')
@click.option('--order', type=click.Choice(SortDirection.ALL), default=SortDirection.ASC,
              show_default=True, help='Admin sort direction')
@click.option('--category-id', type=int, default=None, help='Customer category filter')
@click.option('--limit', type=int, default=None, help='Page size')
@click.option('--cursor', default=None, help='Start after this cursor')
@click.option('--all', 'follow', is_flag=True, help='Follow nextCursor to the end')
@with_appcontext
def list_catalog(role, sort_order, sort_by, order, category_id, limit, cursor, follow):
    """Print the product listing."""
    if role == Role.CUSTOMER:
        filters = CustomerFilters(sort_order=sort_order)
    else:
        filters = AdminFilters(sort_by=sort_by, sort_order=order)

    page_number = 0
    while True:
        try:
            page = list_products(role, filters, category_id=category_id, cursor=cursor, limit=limit)
        except ValidationError as e:
            raise click.ClickException(str(e))
        except CatalogQueryFailed as e:
            raise click.ClickException(f"Catalog query failed: {e.cause!r}")

        page_number += 1
        click.echo("\n" + "=" * 80)
        click.echo(f"Page {page_number} ({len(page['products'])} of {page['total']})")
        click.echo("=" * 80)
        click.echo(f"{'ID':<6} {'Name':<28} {'Price':<8} {'Stock':<6} {'Feat':<5} {'Created':<21} Categories")
        for p in page["products"]:
            price = "-" if p["price_cents"] is None else p["price_cents"]
            stock = "-" if p["stock"] is None else p["stock"]
            cats = ", ".join(c["name"] for c in p["categories"]) or "-"
            click.echo(
                f"{p['id']:<6} {p['name'][:28]:<28} {price!s:<8} {stock!s:<6} "
                f"{'yes' if p['featured'] else 'no':<5} {p['created_at']:<21} {cats}"
            )

        cursor = page["nextCursor"]
        if not follow or cursor is None:
            break

    if cursor:
        click.echo(f"\nnextCursor: {cursor}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(catalog_group)
