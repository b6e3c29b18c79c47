"""
Product Service - Business logic for the product catalogue
"""

from typing import Any, Dict, List
import logging

from stockroom.database import transaction
from stockroom.exceptions import InventoryError, InvalidArgumentError, InvalidStateError, NotFoundError
from stockroom.models import Product
from stockroom.repositories import ProductRepository

logger = logging.getLogger(__name__)

# Stock levels only move through stock-in and stock-out
STOCK_FIELDS = frozenset({'quantity', 'total_quantity'})

UPDATABLE_FIELDS = frozenset({
    'name', 'sku', 'category', 'vendor', 'reorder_threshold',
    'cost_price', 'selling_price', 'description'
})


class ProductService:
    """Catalogue CRUD for products"""

    def __init__(self):
        self.product_repo = ProductRepository()

    def create_product(self, **kwargs) -> Product:
        """
        Create a product.

        ``total_quantity`` defaults to the opening ``quantity`` and may not
        be lower than it.

        Raises:
            InvalidArgumentError: duplicate SKU, negative or inconsistent quantities
        """
        quantity = kwargs.get('quantity', 0)
        total_quantity = kwargs.get('total_quantity')
        if total_quantity is None:
            total_quantity = quantity

        if quantity < 0 or total_quantity < 0:
            raise InvalidArgumentError("Quantities cannot be negative")
        if quantity > total_quantity:
            raise InvalidArgumentError("Quantity cannot exceed total quantity")
        if kwargs.get('reorder_threshold', 0) < 0:
            raise InvalidArgumentError("Reorder threshold cannot be negative")

        try:
            with transaction():
                if self.product_repo.get_by_sku(kwargs['sku']):
                    raise InvalidArgumentError(f"Product with SKU {kwargs['sku']} already exists")

                product = self.product_repo.add(Product(
                    name=kwargs['name'],
                    sku=kwargs['sku'],
                    category=kwargs['category'],
                    vendor=kwargs['vendor'],
                    quantity=quantity,
                    total_quantity=total_quantity,
                    reorder_threshold=kwargs.get('reorder_threshold', 0),
                    cost_price=kwargs['cost_price'],
                    selling_price=kwargs['selling_price'],
                    description=kwargs.get('description')
                ))

            logger.info(f"Created product {product.id} ({product.sku})")
            return product

        except InventoryError as e:
            logger.warning(f"Product creation rejected: {e.message}")
            raise
        except Exception as e:
            logger.error(f"Error creating product: {str(e)}")
            raise

    def update_product(self, product_id: int, updates: Dict[str, Any]) -> Product:
        """Update catalogue fields; stock levels are not editable here"""
        touched_stock = STOCK_FIELDS.intersection(updates)
        if touched_stock:
            raise InvalidArgumentError(
                f"Cannot update {', '.join(sorted(touched_stock))}; use stock-in or stock-out"
            )

        try:
            with transaction():
                product = self.product_repo.get_by_id(product_id)
                if not product:
                    raise NotFoundError(f"Product {product_id} not found")

                new_sku = updates.get('sku')
                if new_sku and new_sku != product.sku and self.product_repo.get_by_sku(new_sku):
                    raise InvalidArgumentError(f"Product with SKU {new_sku} already exists")

                if updates.get('reorder_threshold', 0) < 0:
                    raise InvalidArgumentError("Reorder threshold cannot be negative")

                for key, value in updates.items():
                    if key in UPDATABLE_FIELDS:
                        setattr(product, key, value)

            logger.info(f"Updated product {product_id}")
            return product

        except InventoryError as e:
            logger.warning(f"Product update rejected: {e.message}")
            raise
        except Exception as e:
            logger.error(f"Error updating product {product_id}: {str(e)}")
            raise

    def delete_product(self, product_id: int) -> None:
        """Delete a product that no ledger record references"""
        try:
            with transaction():
                product = self.product_repo.get_by_id(product_id)
                if not product:
                    raise NotFoundError(f"Product {product_id} not found")

                if self.product_repo.has_history(product_id):
                    raise InvalidStateError(
                        f"Product {product_id} has stock history and cannot be deleted"
                    )

                self.product_repo.delete(product)

            logger.info(f"Deleted product {product_id}")

        except InventoryError as e:
            logger.warning(f"Product deletion rejected: {e.message}")
            raise
        except Exception as e:
            logger.error(f"Error deleting product {product_id}: {str(e)}")
            raise

    def get_product(self, product_id: int) -> Product:
        product = self.product_repo.get_by_id(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def list_products(self, category: str = None, search: str = None) -> List[Product]:
        """Get products ordered by name"""
        try:
            return self.product_repo.get_all(category=category, search=search)
        except Exception as e:
            logger.error(f"Error listing products: {str(e)}")
            raise

    def list_low_stock_products(self) -> List[Product]:
        """Get products below their reorder threshold"""
        try:
            return self.product_repo.get_low_stock()
        except Exception as e:
            logger.error(f"Error getting low stock products: {str(e)}")
            raise
