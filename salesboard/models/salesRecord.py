from sqlalchemy import Column, Integer, String, Float
from salesboard.core.database import Base

class SalesRecord(Base):
    __tablename__ = 'sales'
    id = Column(Integer, primary_key=True)
    item_name = Column(String(255))
    category = Column(String(255), index=True)
    sales = Column(Float)
    revenue = Column(Float)
