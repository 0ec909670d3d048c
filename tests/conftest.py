from datetime import timedelta
from unittest.mock import MagicMock

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import loom.data.models  # noqa: F401
from loom.api.deps import get_notification_service
from loom.data.database import Base, get_db, make_engine, utc_now
from loom.data.models.auction_piece import AuctionPieceModel, STATUS_LIVE
from loom.data.models.cart_item import CartItemModel
from loom.data.models.product import ProductModel
from loom.data.models.user import ROLE_ARTISAN, ROLE_CUSTOMER, UserModel
from loom.main import create_app
from loom.services.notification_service import NotificationService
from loom.utils import settings


@pytest.fixture(scope="function")
def engine(tmp_path):
    """
    A fresh SQLite file per test. A file (not :memory:) so that two sessions
    get two connections and can interleave transactions.
    """
    engine = make_engine(f"sqlite:///{tmp_path / 'loom-test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def notifier():
    return MagicMock(spec=NotificationService)


@pytest.fixture(scope="function")
def client(db_session, notifier):
    """A TestClient bound to the per-test database, with notifications mocked."""
    app = create_app(init_database=False)

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_service] = lambda: notifier

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def auth_headers(uid: str) -> dict:
    token = jwt.encode({"sub": uid}, settings.AUTH_SECRET_KEY, algorithm=settings.AUTH_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth():
    return auth_headers


@pytest.fixture
def make_user(db_session):
    def _make_user(uid: str, role: str = ROLE_CUSTOMER, email: str | None = None):
        user = UserModel(id=uid, display_name=uid.title(), email=email, role=role)
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def artisan(make_user):
    return make_user("weaver", role=ROLE_ARTISAN, email="weaver@example.com")


@pytest.fixture
def make_product(db_session):
    def _make_product(product_id: str, stock: int = 5, price: int = 1000, artisan_id: str = "weaver", **extra):
        product = ProductModel(
            id=product_id,
            artisan_id=artisan_id,
            name=extra.pop("name", f"Product {product_id}"),
            description="handmade",
            price=price,
            stock=stock,
            category=extra.pop("category", "textiles"),
            region=extra.pop("region", "gujarat"),
            materials=["cotton"],
            image_url=f"https://images.example.com/{product_id}.jpg",
            **extra,
        )
        db_session.add(product)
        db_session.commit()
        return product

    return _make_product


@pytest.fixture
def put_in_cart(db_session):
    """Writes a cart row directly, bypassing the stock courtesy check."""

    def _put_in_cart(user_id: str, product: ProductModel, quantity: int):
        db_session.add(
            CartItemModel(
                user_id=user_id,
                product_id=product.id,
                quantity=quantity,
                price=product.price,
                name=product.name,
                image_url=product.image_url,
                artisan_id=product.artisan_id,
                added_at=utc_now(),
            )
        )
        db_session.commit()

    return _put_in_cart


@pytest.fixture
def make_piece(db_session):
    def _make_piece(piece_id: str = "piece-1", artisan_id: str = "weaver", **overrides):
        values = dict(
            id=piece_id,
            artisan_id=artisan_id,
            name="Patola Saree",
            description="Double ikat silk",
            image_url="https://images.example.com/patola.jpg",
            materials=["silk"],
            status=STATUS_LIVE,
            reserve_price=1000,
            end_time=utc_now() + timedelta(hours=2),
        )
        values.update(overrides)
        piece = AuctionPieceModel(**values)
        db_session.add(piece)
        db_session.commit()
        return piece

    return _make_piece
