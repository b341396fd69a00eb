from .schemas import CartItem, CategoryRef, OrderServiceLine, ServiceItem
from .service import CartStore

__all__ = ["CartItem", "CartStore", "CategoryRef", "OrderServiceLine", "ServiceItem"]
