from pydantic import BaseModel, ConfigDict
from typing import Optional, Dict


class SalesRecordCreate(BaseModel):
    item_name: Optional[str] = None
    category: Optional[str] = None
    units_sold: Optional[float] = None
    revenue: Optional[float] = None

    model_config = ConfigDict(frozen=True)


class SalesRecordResponse(SalesRecordCreate):
    id: int

    @classmethod
    def from_row(cls, row):
        # the table keeps the CSV column name "sales" for units sold
        return cls(
            id=row.id,
            item_name=row.item_name,
            category=row.category,
            units_sold=row.sales,
            revenue=row.revenue,
        )


class UploadResponse(BaseModel):
    message: str


class CategoryTotals(BaseModel):
    units_sold: float
    revenue: float


CategorySummaryResponse = Dict[str, CategoryTotals]
