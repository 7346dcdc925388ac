from models import db, BIGINT
from datetime import datetime


class Product(db.Model):
    __tablename__ = "shopping_list"

    id = db.Column(BIGINT, primary_key=True)

    # Core details
    brand = db.Column(db.String(100), nullable=True)
    name = db.Column(db.String(100), nullable=False)
    jan = db.Column(db.String(32), nullable=True, index=True)        # barcode

    # Pricing (tax-exclusive, whole yen)
    price = db.Column(db.Integer, nullable=False)

    # No FK: deleting a shop leaves the reference dangling
    shop_id = db.Column(BIGINT, nullable=True, index=True)

    # Inventory & unit info
    stock = db.Column(db.Integer, nullable=False, default=0)
    amount = db.Column(db.String(50), nullable=True)                # e.g. "500"
    unit = db.Column(db.String(20), nullable=True)                  # g, ml, piece, pack, ...
    size = db.Column(db.String(10), nullable=True)                  # SS..LL, large/medium/small
    quantity_in_pack = db.Column(db.Integer, nullable=False, default=1)

    # Soft delete / confirmation marker
    is_visible = db.Column(db.Boolean, nullable=False, default=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def as_dict(self):
        return {
            "id": self.id,
            "brand": self.brand or "",
            "name": self.name,
            "price": self.price,
            "shop_id": self.shop_id,
            "stock": self.stock or 0,
            "jan": self.jan or "",
            "amount": self.amount or "",
            "unit": self.unit or "",
            "size": self.size or "",
            "quantity_in_pack": self.quantity_in_pack or 1,
            "is_visible": bool(self.is_visible),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
