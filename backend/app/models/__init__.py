from .profile import Profile
from .revoked_token import RevokedToken
from .supplier import Supplier
from .product import Product
from .purchase_order import PurchaseOrder
from .po_item import POItem
__all__ = ["Profile","RevokedToken","Supplier","Product","PurchaseOrder","POItem"]
