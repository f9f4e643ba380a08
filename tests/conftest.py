import os

# Settings are read at import time; keep tests off the real database and log dir
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), ".logs"))

import pytest
from decimal import Decimal
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from ecocatalog.database.core import build_engine, get_db
from ecocatalog.database.models import Base, User, Product
from ecocatalog.utils import password_utils
from main import app

TEST_PASSWORD = "ValidPassword123!"


@pytest.fixture(scope="function")
def engine():
    """
    One in-memory SQLite database per test, shared by every thread via StaticPool.
    """
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """
    Creates a new, isolated database session for each test.
    """
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def test_user(db_session):
    """
    A 30 year old shopper who identifies as Female.
    """
    user = User(
        name="Test User",
        email="test@example.com",
        password_hash=password_utils.get_password_hash(TEST_PASSWORD),
        age=30,
        gender="Female",
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def make_product(db_session, **fields):
    product = Product(**fields)
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture(scope="function")
def products(db_session):
    """
    A small catalogue covering every targeting and scoring case, keyed by a
    short handle.
    """
    catalogue = {
        "tee_women_25": dict(title="Organic Cotton Tee", text="Soft and breathable",
                             eco_score=Decimal("9.00"), age_target="25-34", gender_target="Female",
                             category="Clothing", price=Decimal("24.00")),
        "toothbrush_any": dict(title="Bamboo Toothbrush", text="Compostable handle",
                               eco_score=Decimal("5.00"), age_target=None, gender_target=None,
                               category="Beauty", price=Decimal("3.50")),
        "sneaker_women_18": dict(title="Recycled Sneaker", text="Made from ocean plastic",
                                 eco_score=Decimal("8.00"), age_target="18-24", gender_target="Female",
                                 category="Clothing"),
        "razor_men_25": dict(title="Steel Safety Razor", text="Lasts a lifetime",
                             eco_score=Decimal("7.50"), age_target="25-34", gender_target="Male",
                             category="Beauty"),
        "bottle_multi": dict(title="Glass Water Bottle", text="100% recycled glass, great for the GYM",
                             eco_score=Decimal("6.00"), age_target="18-24, 25-34", gender_target="Female, Male",
                             category="Home"),
        "tote_unscored": dict(title="Canvas Tote", text=None,
                              eco_score=None, age_target=None, gender_target="female",
                              category="Home"),
        "lamp_55": dict(title="Solar Lamp", text="Charges in daylight",
                        eco_score=Decimal("4.00"), age_target="55+", gender_target=None,
                        category=None),
        "soap_blank_category": dict(title="Olive Oil Soap", text="50%_off bar soap",
                                    eco_score=Decimal("3.00"), age_target=None, gender_target="Male",
                                    category=""),
    }
    return {handle: make_product(db_session, **fields) for handle, fields in catalogue.items()}


@pytest.fixture(scope="function")
def client(db_session, mocker):
    """
    Creates a TestClient for the app, overriding the database dependency and
    mocking the Redis token denylist.
    """
    mocker.patch("ecocatalog.denylist_service.is_token_denylisted", return_value=False)
    mocker.patch("ecocatalog.denylist_service.add_token_to_denylist", return_value=None)

    def override_get_db():
        try:
            yield db_session
        finally:
            db_session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def auth_headers(client, test_user):
    """
    Logs in the `test_user` and returns valid authorization headers.
    """
    response = client.post("/api/auth/login", json={"email": test_user.email, "password": TEST_PASSWORD})
    assert response.status_code == 200, "Failed to log in test user for auth_headers"

    token = response.json()["accessToken"]
    return {"Authorization": f"Bearer {token}"}
