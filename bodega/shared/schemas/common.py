# bodega/shared/schemas/common.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime

class BaseResponse(BaseModel):
    success: bool
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)

class ErrorResponse(BaseResponse):
    success: bool = False
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

class ItemResult(BaseModel):
    """Resultado por ítem en operaciones por lote"""
    name: Optional[str] = None
    item_id: Optional[int] = None
    status: str  # success | error | skipped
    message: Optional[str] = None
    previous_stock: Optional[int] = None
    updated_stock: Optional[int] = None
    error_detail: Optional[str] = None

class BatchSummary(BaseModel):
    total: int
    succeeded: int
    failed: int

    @classmethod
    def from_results(cls, results: List[ItemResult]) -> "BatchSummary":
        succeeded = len([r for r in results if r.status == "success"])
        return cls(total=len(results), succeeded=succeeded, failed=len(results) - succeeded)
