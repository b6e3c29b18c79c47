import pytest
from datetime import timedelta
from decimal import Decimal
from sqlalchemy.exc import IntegrityError

from stockroom.database import transaction, utcnow
from stockroom.models import MovementType, Product, RequestStatus, StockMovement
from stockroom.repositories import (
    ProductRepository, StockInRepository, StockMovementRepository,
    StockOutRequestRepository, UserRepository
)
from tests.conftest import (
    create_test_product, create_test_request, create_test_stock_in, create_test_user
)


class TestProductRepository:
    """Test ProductRepository implementations."""

    def test_get_by_sku(self, db_session):
        repo = ProductRepository()
        original = create_test_product(db_session, sku='GET-SKU-001')

        retrieved = repo.get_by_sku('GET-SKU-001')

        assert retrieved is not None
        assert retrieved.id == original.id

    def test_get_all_filters_by_category_and_search(self, db_session):
        repo = ProductRepository()
        create_test_product(db_session, name='Blue Pen', sku='PEN-BLUE', category='Stationery')
        create_test_product(db_session, name='Red Pen', sku='PEN-RED', category='Stationery')
        create_test_product(db_session, name='Laptop', sku='LAP-001', category='Electronics')

        stationery = repo.get_all(category='Stationery')
        assert [p.name for p in stationery] == ['Blue Pen', 'Red Pen']

        matches = repo.get_all(search='lap')
        assert [p.sku for p in matches] == ['LAP-001']

        by_sku = repo.get_all(search='pen-r')
        assert [p.name for p in by_sku] == ['Red Pen']

    def test_get_low_stock_uses_strict_threshold(self, db_session):
        repo = ProductRepository()
        low = create_test_product(db_session, quantity=4, total_quantity=10, reorder_threshold=5)
        create_test_product(db_session, quantity=5, total_quantity=10, reorder_threshold=5)

        result = repo.get_low_stock()

        assert [p.id for p in result] == [low.id]
        assert repo.count_low_stock() == 1

    def test_increment_quantity_raises_both_levels(self, db_session):
        repo = ProductRepository()
        product = create_test_product(db_session, quantity=10, total_quantity=30)

        with transaction():
            assert repo.increment_quantity(product.id, 5) is True

        refreshed = repo.get_by_id(product.id)
        assert refreshed.quantity == 15
        assert refreshed.total_quantity == 35

    def test_decrement_quantity_refuses_to_go_negative(self, db_session):
        repo = ProductRepository()
        product = create_test_product(db_session, quantity=10, total_quantity=10)

        with transaction():
            assert repo.decrement_quantity(product.id, 11) is False
            assert repo.decrement_quantity(product.id, 10) is True

        refreshed = repo.get_by_id(product.id)
        assert refreshed.quantity == 0
        assert refreshed.total_quantity == 10

    def test_quantity_check_constraint(self, db_session):
        product = create_test_product(db_session, quantity=1, total_quantity=1)

        with pytest.raises(IntegrityError):
            with transaction():
                Product.query.filter_by(id=product.id).update(
                    {Product.quantity: -1}, synchronize_session=False
                )

    def test_has_history(self, db_session):
        repo = ProductRepository()
        user = create_test_user(db_session)
        untouched = create_test_product(db_session)
        received = create_test_product(db_session)
        create_test_stock_in(db_session, received, user)

        assert repo.has_history(untouched.id) is False
        assert repo.has_history(received.id) is True

    def test_calculate_stock_value(self, db_session):
        repo = ProductRepository()
        assert repo.calculate_stock_value() == Decimal('0.00')

        create_test_product(db_session, quantity=3, total_quantity=3, selling_price=Decimal('10.25'))
        create_test_product(db_session, quantity=2, total_quantity=2, selling_price=Decimal('0.50'))

        assert repo.calculate_stock_value() == Decimal('31.75')
        assert repo.count_total() == 2


class TestStockOutRequestRepository:
    """Test StockOutRequestRepository implementations."""

    def test_transition_is_compare_and_set(self, db_session):
        repo = StockOutRequestRepository()
        user = create_test_user(db_session)
        product = create_test_product(db_session)
        request = create_test_request(db_session, product, user)

        with transaction():
            assert repo.transition(
                request.id, RequestStatus.PENDING, RequestStatus.APPROVED, reviewed_by=user.id
            ) is True
            # Second reviewer still believes the request is pending
            assert repo.transition(
                request.id, RequestStatus.PENDING, RequestStatus.REJECTED
            ) is False

        refreshed = repo.get_by_id(request.id)
        assert refreshed.status == RequestStatus.APPROVED
        assert refreshed.reviewed_by == user.id

    def test_get_all_filters(self, db_session):
        repo = StockOutRequestRepository()
        alice = create_test_user(db_session)
        bob = create_test_user(db_session)
        product = create_test_product(db_session)
        pending = create_test_request(db_session, product, alice)
        create_test_request(db_session, product, bob, status=RequestStatus.APPROVED)

        assert [r.id for r in repo.get_all(status=RequestStatus.PENDING)] == [pending.id]
        assert [r.id for r in repo.get_all(requester_id=alice.id)] == [pending.id]
        assert len(repo.get_all()) == 2

    def test_get_recent_reviewed_skips_pending(self, db_session):
        repo = StockOutRequestRepository()
        user = create_test_user(db_session)
        product = create_test_product(db_session)
        create_test_request(db_session, product, user)
        rejected = create_test_request(db_session, product, user, status=RequestStatus.REJECTED)

        assert [r.id for r in repo.get_recent_reviewed()] == [rejected.id]

    def test_sum_fulfilled_by_category(self, db_session):
        repo = StockOutRequestRepository()
        user = create_test_user(db_session)
        tools = create_test_product(db_session, category='Tools')
        paper = create_test_product(db_session, category='Paper')
        create_test_request(db_session, tools, user, quantity=3, status=RequestStatus.FULFILLED)
        create_test_request(db_session, tools, user, quantity=4, status=RequestStatus.FULFILLED)
        create_test_request(db_session, paper, user, quantity=9, status=RequestStatus.APPROVED)

        assert [tuple(row) for row in repo.sum_fulfilled_by_category()] == [('Tools', 7)]


class TestStockInRepository:

    def test_get_all_newest_first(self, db_session):
        repo = StockInRepository()
        user = create_test_user(db_session)
        product = create_test_product(db_session)
        now = utcnow()
        older = create_test_stock_in(db_session, product, user, created_at=now - timedelta(hours=1))
        newer = create_test_stock_in(db_session, product, user, created_at=now)

        assert [r.id for r in repo.get_all()] == [newer.id, older.id]
        assert [r.id for r in repo.get_recent(limit=1)] == [newer.id]

    def test_sum_by_category(self, db_session):
        repo = StockInRepository()
        user = create_test_user(db_session)
        tools = create_test_product(db_session, category='Tools')
        paper = create_test_product(db_session, category='Paper')
        create_test_stock_in(db_session, tools, user, quantity=5)
        create_test_stock_in(db_session, paper, user, quantity=2)
        create_test_stock_in(db_session, paper, user, quantity=3)

        assert [tuple(row) for row in repo.sum_by_category()] == [('Paper', 5), ('Tools', 5)]


class TestStockMovementRepository:

    def test_search_paginates_and_filters(self, db_session):
        repo = StockMovementRepository()
        user = create_test_user(db_session)
        product = create_test_product(db_session)
        other = create_test_product(db_session)

        with transaction():
            for quantity in range(1, 6):
                repo.add(StockMovement(
                    product_id=product.id,
                    movement_type=MovementType.STOCK_IN,
                    quantity=quantity,
                    user_id=user.id
                ))
            repo.add(StockMovement(
                product_id=other.id,
                movement_type=MovementType.STOCK_OUT,
                quantity=1,
                user_id=user.id
            ))

        items, total = repo.search(product_id=product.id, page=1, per_page=2)
        assert total == 5
        assert len(items) == 2

        items, total = repo.search(movement_type=MovementType.STOCK_OUT)
        assert total == 1
        assert items[0].product_id == other.id


class TestUserRepository:

    def test_count_active(self, db_session):
        repo = UserRepository()
        create_test_user(db_session)
        create_test_user(db_session, is_active=False)

        assert repo.count_active() == 1
        assert len(repo.get_all()) == 2
