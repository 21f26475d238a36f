"""Fixtures compartidas: aplicación con SQLite temporal, cliente HTTP y tokens JWT."""

import time
from decimal import Decimal

import jwt
import pytest
from httpx import ASGITransport, AsyncClient

from inventario.core.config import Settings
from inventario.db.database import create_tables
from inventario.db.models.category_model import Category
from inventario.db.models.product_model import Product
from inventario.main import create_app

JWT_SECRET = "test-secret-key"


def make_token(user_type: str, active: bool = True, secret: str = JWT_SECRET, expires_in: int = 3600) -> str:
    payload = {
        "idUsuario": 1,
        "tipoUsuario": user_type,
        "activo": active,
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings(tmp_path):
    return Settings(
        JWT_SECRET_KEY=JWT_SECRET,
        DATABASE_URL_OVERRIDE=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        IMAGES_DIR=tmp_path / "images",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
async def app(settings):
    application = create_app(settings)
    await create_tables(application.state.engine)
    yield application
    await application.state.engine.dispose()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
async def db(app):
    async with app.state.session_factory() as session:
        yield session


@pytest.fixture
def admin_headers():
    return bearer(make_token("administrador"))


@pytest.fixture
def employee_headers():
    return bearer(make_token("empleado"))


@pytest.fixture
def customer_headers():
    return bearer(make_token("cliente"))


@pytest.fixture
async def category(db):
    cat = Category(name="Abarrotes")
    db.add(cat)
    await db.commit()
    await db.refresh(cat)
    return cat


@pytest.fixture
async def products(db, category):
    """Café (10, activo), Azúcar (5, activo), Sal (5, inactivo), en ese orden de alta."""
    rows = [
        Product(name="Café", price=Decimal("10"), current_stock=8, minimum_stock=2,
                is_promotion=False, active=True, image_url="/images/default-product.svg",
                category_id=category.category_id),
        Product(name="Azúcar", price=Decimal("5"), current_stock=20, minimum_stock=5,
                is_promotion=True, active=True, image_url="/images/default-product.svg"),
        Product(name="Sal", price=Decimal("5"), current_stock=3, minimum_stock=0,
                is_promotion=False, active=False, image_url="/images/default-product.svg",
                category_id=category.category_id),
    ]
    for row in rows:
        db.add(row)
        await db.commit()
        await db.refresh(row)
    return rows
