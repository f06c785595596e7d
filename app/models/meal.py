import uuid

from sqlalchemy import Column, String, Text, Boolean, BigInteger, ForeignKey
from sqlalchemy.orm import relationship
from app.core.base import Base

class Meal(Base):
    __tablename__ = "meals"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    is_on_diet = Column(Boolean, nullable=False)
    # epoch в миллисекундах
    date = Column(BigInteger, nullable=False, index=True)

    user = relationship("User", back_populates="meals")
