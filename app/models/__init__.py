from app.models.user import User
from app.models.product import Product
from app.models.order import Order
from app.models.storage_entry import StorageEntry

# add ALL table models here
