from datetime import datetime
from lendtrack.extensions import db

class Equipment(db.Model):
    __tablename__ = "equipment"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    serial_number = db.Column(db.String(100), unique=True, nullable=False, index=True)
    model = db.Column(db.String(255), nullable=True)
    description = db.Column(db.String(1000), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
