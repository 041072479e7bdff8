from .base import Timestamped
from .auth import User
from .stores import Store
from .inventory import ProductCategory, Product
from .customers import Customer
from .sales import Sale, Expense, SALE_STATUSES

__all__ = [
    'Timestamped',
    'User',
    'Store',
    'ProductCategory', 'Product',
    'Customer',
    'Sale', 'Expense', 'SALE_STATUSES',
]
