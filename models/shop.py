from models import db, BIGINT
from datetime import datetime


class Shop(db.Model):
    __tablename__ = "shops"

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    location = db.Column(db.String(200), nullable=True)             # free-text place / memo
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def as_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location or "",
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
