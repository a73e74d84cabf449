#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from freshcart.data.models.user import UserModel
from freshcart.data.models.profile import ProfileModel
from freshcart.data.models.order import OrderModel
from freshcart.data.models.order_item import OrderItemModel

__all__ = ["UserModel", "ProfileModel", "OrderModel", "OrderItemModel"]
