import jwt
import pytest

from stockroom.database import utcnow
from stockroom.middlewares.auth import create_token
from stockroom.models import RequestStatus
from stockroom.repositories import ProductRepository
from tests.conftest import (
    auth_headers, create_test_product, create_test_request, generate_product_data
)


class TestAuthentication:
    """Test bearer token handling."""

    def test_missing_token(self, client, db_session):
        response = client.get('/api/products')

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Authentication required'

    def test_malformed_header(self, client, db_session):
        response = client.get('/api/products', headers={'Authorization': 'Token abc'})

        assert response.status_code == 401

    def test_bad_signature(self, client, db_session, staff):
        token = jwt.encode({'sub': str(staff.id), 'role': 'staff'}, 'another-secret-of-enough-length-000', algorithm='HS256')

        response = client.get('/api/products', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401
        assert response.get_json()['message'] == 'Invalid token'

    def test_expired_token(self, client, db_session, staff):
        token = create_token(staff.id, 'staff', expires_in=-60)

        response = client.get('/api/products', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401
        assert response.get_json()['message'] == 'Token has expired'

    def test_wrong_role(self, client, db_session, employee):
        response = client.post(
            '/api/products', json=generate_product_data(), headers=auth_headers(employee)
        )

        assert response.status_code == 403


class TestProductRoutes:

    def test_create_and_get_product(self, client, db_session, staff):
        data = generate_product_data(sku='ROUTE-001')

        response = client.post('/api/products', json=data, headers=auth_headers(staff))

        assert response.status_code == 201
        body = response.get_json()
        assert body['sku'] == 'ROUTE-001'
        assert body['quantity'] == 20
        assert body['selling_price'] == '4.99'
        assert body['stock_status'] == 'in_stock'

        response = client.get(f"/api/products/{body['id']}", headers=auth_headers(staff))
        assert response.status_code == 200
        assert response.get_json()['name'] == 'Widget'

    def test_create_product_validation_error(self, client, db_session, staff):
        response = client.post(
            '/api/products', json={'name': 'No SKU'}, headers=auth_headers(staff)
        )

        assert response.status_code == 400
        body = response.get_json()
        assert body['error'] == 'Validation Error'
        assert 'sku' in body['details']

    def test_duplicate_sku(self, client, db_session, staff):
        create_test_product(db_session, sku='TAKEN-001')

        response = client.post(
            '/api/products', json=generate_product_data(sku='TAKEN-001'), headers=auth_headers(staff)
        )

        assert response.status_code == 400
        assert response.get_json()['kind'] == 'invalid_argument'

    def test_get_missing_product(self, client, db_session, staff):
        response = client.get('/api/products/9999', headers=auth_headers(staff))

        assert response.status_code == 404
        assert response.get_json()['kind'] == 'not_found'

    def test_update_cannot_touch_quantity(self, client, db_session, staff):
        product = create_test_product(db_session, quantity=10, total_quantity=10)

        response = client.put(
            f'/api/products/{product.id}', json={'quantity': 99}, headers=auth_headers(staff)
        )

        assert response.status_code == 400
        assert ProductRepository().get_by_id(product.id).quantity == 10

    def test_list_and_low_stock(self, client, db_session, staff):
        create_test_product(db_session, name='Plenty', quantity=50, total_quantity=50, reorder_threshold=5)
        low = create_test_product(db_session, name='Scarce', quantity=1, total_quantity=50, reorder_threshold=5)

        response = client.get('/api/products?search=scar', headers=auth_headers(staff))
        assert [p['id'] for p in response.get_json()] == [low.id]

        response = client.get('/api/products/low-stock', headers=auth_headers(staff))
        assert response.status_code == 200
        assert [p['name'] for p in response.get_json()] == ['Scarce']

    def test_delete_requires_reviewer(self, client, db_session, staff, manager):
        product = create_test_product(db_session)

        response = client.delete(f'/api/products/{product.id}', headers=auth_headers(staff))
        assert response.status_code == 403

        response = client.delete(f'/api/products/{product.id}', headers=auth_headers(manager))
        assert response.status_code == 200


class TestStockRoutes:
    """End-to-end stock-in and stock-out flows through the API."""

    def test_stock_in(self, client, db_session, staff, sample_product):
        response = client.post('/api/stock-in', json={
            'product_id': sample_product.id,
            'quantity': 15,
            'supplier': 'Acme Supplies',
            'notes': 'Pallet 4'
        }, headers=auth_headers(staff))

        assert response.status_code == 201
        assert response.get_json()['created_by'] == staff.id
        record_id = response.get_json()['id']

        response = client.get(f'/api/stock-in/{record_id}', headers=auth_headers(staff))
        assert response.get_json()['supplier'] == 'Acme Supplies'

        product = client.get(f'/api/products/{sample_product.id}', headers=auth_headers(staff)).get_json()
        assert product['quantity'] == 115
        assert product['total_quantity'] == 115

        movements = client.get(
            f'/api/products/{sample_product.id}/movements', headers=auth_headers(staff)
        ).get_json()
        assert [m['movement_type'] for m in movements] == ['stock_in']

    def test_stock_in_zero_quantity(self, client, db_session, staff, sample_product):
        response = client.post('/api/stock-in', json={
            'product_id': sample_product.id,
            'quantity': 0,
            'supplier': 'Acme Supplies'
        }, headers=auth_headers(staff))

        assert response.status_code == 400
        body = response.get_json()
        assert body['kind'] == 'invalid_argument'
        assert 'quantity' in body['details']
        assert ProductRepository().get_by_id(sample_product.id).quantity == 100

    def test_stock_out_flow(self, client, db_session, employee, manager, staff, sample_product):
        response = client.post('/api/stock-out', json={
            'product_id': sample_product.id,
            'quantity': 30,
            'purpose': 'Trade show'
        }, headers=auth_headers(employee))
        assert response.status_code == 201
        request_id = response.get_json()['id']
        assert response.get_json()['status'] == 'pending'
        assert response.get_json()['requester_id'] == employee.id

        response = client.post(f'/api/stock-out/{request_id}/approve', headers=auth_headers(employee))
        assert response.status_code == 403

        response = client.post(f'/api/stock-out/{request_id}/approve', headers=auth_headers(manager))
        assert response.status_code == 200
        assert response.get_json()['status'] == 'approved'

        response = client.post(f'/api/stock-out/{request_id}/fulfill', headers=auth_headers(staff))
        assert response.status_code == 200
        assert response.get_json()['status'] == 'fulfilled'

        response = client.post(f'/api/stock-out/{request_id}/fulfill', headers=auth_headers(manager))
        assert response.status_code == 400
        assert response.get_json()['kind'] == 'invalid_state'

        assert ProductRepository().get_by_id(sample_product.id).quantity == 70

    def test_insufficient_stock_response(self, client, db_session, employee, manager, sample_product):
        request = create_test_request(db_session, sample_product, employee, quantity=150,
                                      status=RequestStatus.APPROVED)

        response = client.post(f'/api/stock-out/{request.id}/fulfill', headers=auth_headers(manager))

        assert response.status_code == 400
        body = response.get_json()
        assert body['kind'] == 'insufficient_stock'
        assert body['available'] == 100
        assert body['requested'] == 150

    def test_self_fulfilment_forbidden(self, client, db_session, staff, sample_product):
        request = create_test_request(db_session, sample_product, staff, status=RequestStatus.APPROVED)

        response = client.post(f'/api/stock-out/{request.id}/fulfill', headers=auth_headers(staff))

        assert response.status_code == 403
        assert response.get_json()['kind'] == 'forbidden'

    def test_reject_needs_reason(self, client, db_session, employee, manager, sample_product):
        request = create_test_request(db_session, sample_product, employee)

        response = client.post(f'/api/stock-out/{request.id}/reject', json={}, headers=auth_headers(manager))
        assert response.status_code == 400
        assert 'reason' in response.get_json()['details']

        response = client.post(
            f'/api/stock-out/{request.id}/reject', json={'reason': 'Duplicate'}, headers=auth_headers(manager)
        )
        assert response.status_code == 200
        assert response.get_json()['rejection_reason'] == 'Duplicate'

    def test_list_stock_out_filters(self, client, db_session, employee, staff, sample_product):
        mine = create_test_request(db_session, sample_product, employee)
        create_test_request(db_session, sample_product, staff, status=RequestStatus.APPROVED)

        response = client.get(
            f'/api/stock-out?status=pending&requester_id={employee.id}', headers=auth_headers(staff)
        )
        assert [r['id'] for r in response.get_json()] == [mine.id]

        response = client.get('/api/stock-out?status=bogus', headers=auth_headers(staff))
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Validation Error'
        assert 'status' in response.get_json()['details']

    def test_movements_pagination(self, client, db_session, staff, sample_product):
        for _ in range(3):
            client.post('/api/stock-in', json={
                'product_id': sample_product.id, 'quantity': 1, 'supplier': 'Acme'
            }, headers=auth_headers(staff))

        response = client.get('/api/movements?per_page=2&page=1', headers=auth_headers(staff))

        body = response.get_json()
        assert response.status_code == 200
        assert body['total'] == 3
        assert body['per_page'] == 2
        assert len(body['items']) == 2


class TestAnalyticsAndUsers:

    def test_dashboard(self, client, db_session, staff, sample_product):
        response = client.get('/api/analytics/dashboard', headers=auth_headers(staff))

        assert response.status_code == 200
        assert response.get_json() == {
            'total_products': 1,
            'low_stock_count': 0,
            'total_stock_value': 1000,
            'active_users': 1,
        }

    def test_recent_activity(self, client, db_session, staff, employee, sample_product):
        create_test_request(db_session, sample_product, employee, status=RequestStatus.FULFILLED,
                            updated_at=utcnow())

        response = client.get('/api/analytics/recent-activity', headers=auth_headers(staff))

        items = response.get_json()
        assert [item['type'] for item in items] == ['stock-out']

    def test_category_endpoints(self, client, db_session, staff):
        for path in ('/api/analytics/stock-in-by-category', '/api/analytics/stock-out-by-category'):
            response = client.get(path, headers=auth_headers(staff))
            assert response.status_code == 200
            assert response.get_json() == []

    @pytest.mark.parametrize('role_fixture,status_code', [
        ('admin', 200), ('manager', 200), ('staff', 403), ('employee', 403)
    ])
    def test_list_users_roles(self, client, db_session, request, role_fixture, status_code):
        user = request.getfixturevalue(role_fixture)

        response = client.get('/api/users', headers=auth_headers(user))

        assert response.status_code == status_code
