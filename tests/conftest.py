import os
import uuid
import pytest
from decimal import Decimal

# Set test environment variables before importing the app
os.environ['FLASK_ENV'] = 'testing'

from stockroom.api.main import create_app
from stockroom.middlewares.auth import create_token
from stockroom.models import (
    db, Product, RequestStatus, StockInRecord, StockOutRequest, User, UserRole
)


@pytest.fixture(scope='session')
def app():
    """Create application for the tests."""
    app = create_app('testing')

    with app.app_context():
        # Create all database tables
        db.create_all()
        yield app
        # Clean up
        db.drop_all()


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def db_session(app):
    """Create a database session for a test."""
    yield db.session

    # Clean up tables
    db.session.rollback()
    for table in reversed(db.metadata.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()
    db.session.expunge_all()


@pytest.fixture
def admin(db_session):
    return create_test_user(db_session, role=UserRole.ADMIN)


@pytest.fixture
def manager(db_session):
    return create_test_user(db_session, role=UserRole.MANAGER)


@pytest.fixture
def staff(db_session):
    return create_test_user(db_session, role=UserRole.STAFF)


@pytest.fixture
def employee(db_session):
    return create_test_user(db_session, role=UserRole.EMPLOYEE)


@pytest.fixture
def sample_product(db_session):
    """Product with 100 units available out of 100 received."""
    return create_test_product(db_session, quantity=100, total_quantity=100, reorder_threshold=10)


# Helper functions for tests
def create_test_user(db_session, **kwargs):
    """Create a test user with default values."""
    suffix = str(uuid.uuid4())[:8]
    defaults = {
        'username': f'user-{suffix}',
        'full_name': f'Test User {suffix}',
        'email': f'user-{suffix}@example.com',
        'role': UserRole.STAFF,
        'is_active': True
    }
    defaults.update(kwargs)

    user = User(**defaults)
    db_session.add(user)
    db_session.commit()
    return user


def create_test_product(db_session, **kwargs):
    """Create a test product with default values."""
    defaults = {
        'name': 'Test Product',
        'sku': f'TEST-SKU-{str(uuid.uuid4())[:8]}',  # Generate unique SKU
        'category': 'Electronics',
        'vendor': 'Acme Supplies',
        'quantity': 100,
        'total_quantity': 100,
        'reorder_threshold': 10,
        'cost_price': Decimal('5.00'),
        'selling_price': Decimal('10.00')
    }
    defaults.update(kwargs)

    product = Product(**defaults)
    db_session.add(product)
    db_session.commit()
    return product


def create_test_stock_in(db_session, product, user, **kwargs):
    """Create a stock-in record directly, without touching product quantities."""
    defaults = {
        'product_id': product.id,
        'quantity': 10,
        'supplier': 'Acme Supplies',
        'created_by': user.id
    }
    defaults.update(kwargs)

    record = StockInRecord(**defaults)
    db_session.add(record)
    db_session.commit()
    return record


def create_test_request(db_session, product, requester, **kwargs):
    """Create a stock-out request directly in any status."""
    defaults = {
        'product_id': product.id,
        'requester_id': requester.id,
        'quantity': 5,
        'purpose': 'Office use',
        'status': RequestStatus.PENDING
    }
    defaults.update(kwargs)

    request = StockOutRequest(**defaults)
    db_session.add(request)
    db_session.commit()
    return request


def auth_headers(user, role=None):
    """Bearer headers for a user, signed with the test secret."""
    token = create_token(user.id, role or user.role.value)
    return {
        'Authorization': f'Bearer {token}',
        'Content-Type': 'application/json'
    }


def generate_product_data(**kwargs):
    """Generate product creation payload."""
    defaults = {
        'name': 'Widget',
        'sku': f'WID-{str(uuid.uuid4())[:8]}',
        'category': 'Hardware',
        'vendor': 'Widget Co',
        'quantity': 20,
        'total_quantity': 20,
        'reorder_threshold': 5,
        'cost_price': '2.50',
        'selling_price': '4.99'
    }
    defaults.update(kwargs)
    return defaults
