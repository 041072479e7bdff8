"""
Pytest fixtures for back office tests.

Provides test database setup, an ownership graph of entities, and helpers for
authenticated requests.
"""

from decimal import Decimal

import pytest
from backoffice import create_app
from backoffice.extensions import db
from backoffice.models import User, Store, ProductCategory, Product, Customer
from backoffice.services import auth_service
from backoffice.services.password_service import hash_password
from backoffice.services.token_service import TokenIssuer, TokenSettings, get_token_issuer


TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    'JWT_KEY': 'test-signing-key-with-at-least-32-bytes!',
    'JWT_ISSUER': 'backoffice-tests',
    'JWT_AUDIENCE': 'backoffice-test-clients',
    'JWT_EXPIRATION_DAYS': '7',
    'BCRYPT_ROUNDS': 4,  # bcrypt minimum; keeps the suite fast
    'LOG_LEVEL': 'DEBUG',
}

TEST_ROUNDS = TEST_CONFIG['BCRYPT_ROUNDS']


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app(TEST_CONFIG)

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
        # Clear all data but keep schema; children first so RESTRICT never fires
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        # Sequential sale/expense ids restart; drop stale identities
        db.session.expunge_all()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def issuer(app):
    """The app's token issuer."""
    return get_token_issuer()


@pytest.fixture
def standalone_issuer():
    """Issuer with no app behind it, for pure token tests."""
    return TokenIssuer(TokenSettings(
        key=TEST_CONFIG['JWT_KEY'],
        issuer=TEST_CONFIG['JWT_ISSUER'],
        audience=TEST_CONFIG['JWT_AUDIENCE'],
    ))


@pytest.fixture(scope='function')
def ann(db_session, issuer):
    """Registered user Ann (password 'secret1') plus her registration result."""
    return auth_service.register(
        "Ann", "ann@x.com", "secret1", "",
        issuer=issuer,
        rounds=TEST_ROUNDS,
    )


@pytest.fixture(scope='function')
def owner(db_session):
    """User inserted directly, for schema tests that do not need auth."""
    user = User(
        name="Owner",
        email="owner@shop.test",
        password=hash_password("Password123!", rounds=TEST_ROUNDS),
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture(scope='function')
def store(db_session, owner):
    store = Store(user_id=owner.id, name="Main Street")
    db_session.add(store)
    db_session.commit()
    return store


@pytest.fixture(scope='function')
def category(db_session):
    category = ProductCategory(name="Beverages")
    db_session.add(category)
    db_session.commit()
    return category


@pytest.fixture(scope='function')
def product(db_session, owner, store, category):
    product = Product(
        name="Cold Brew",
        quantity=40,
        price=Decimal("4.50"),
        user_id=owner.id,
        store_id=store.id,
        category_id=category.id,
    )
    db_session.add(product)
    db_session.commit()
    return product


@pytest.fixture(scope='function')
def customer(db_session, owner, store):
    customer = Customer(user_id=owner.id, store_id=store.id, name="Walk-in")
    db_session.add(customer)
    db_session.commit()
    return customer


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}
