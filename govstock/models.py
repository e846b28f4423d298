# govstock/models.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class BillRecord(_CamelModel):
    name: str = ""
    description: str = ""
    pdf_url: str
    history_text: str
    # 1-based worksheet line the record was read from
    row: int = Field(default=0, exclude=True)

class StockImpact(BaseModel):
    symbol: str
    impact: bool  # True = expected to go up

    @field_validator("symbol")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("symbol must be a non-empty ticker")
        return v

class EnrichedBill(BillRecord):
    likelihood: Optional[int] = None
    stocks: List[StockImpact] = []

class AnalysisResponse(BaseModel):
    results: List[EnrichedBill]

class ErrorResponse(BaseModel):
    error: str
