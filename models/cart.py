from models import db, BIGINT
from datetime import datetime


class CartItem(db.Model):
    __tablename__ = "cart_items"

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    price = db.Column(db.Integer, nullable=False, default=0)
    amount = db.Column(db.String(50), nullable=True)
    unit = db.Column(db.String(20), nullable=True)
    shop_id = db.Column(BIGINT, nullable=True, index=True)
    stock = db.Column(db.Integer, nullable=False, default=0)        # snapshot at add time
    checked = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def as_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "amount": self.amount or "",
            "unit": self.unit or "",
            "shop_id": self.shop_id,
            "stock": self.stock or 0,
            "checked": bool(self.checked),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
