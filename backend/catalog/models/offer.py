from sqlalchemy import Column, String, Text, DateTime, func
from catalog.db.database import Base
from catalog.db.identifiers import new_id


class Offer(Base):
    __tablename__ = "offers"

    id = Column(String(32), primary_key=True, default=new_id)
    image_url = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
