"""
Pydantic schemas for the receipt intake endpoint.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class IntakeResponse(BaseModel):
    """
    Response model for POST /intake.

    Every pipeline outcome is a 200 with its status in the body:
    - success: receipt recorded, ledger and summary cells set
    - not-receipt: the image is not a payment receipt, nothing written
    - duplicate: the ledger cell was already filled, nothing written
    - error: the intake failed, see ``error``
    - ignored: the transport filters dropped the message, see ``ignored_reason``
    """
    status: Literal["success", "not-receipt", "duplicate", "error", "ignored"] = Field(
        ..., description="Outcome of the intake"
    )
    payer_name: Optional[str] = Field(None, description="Capitalized payer name (e.g., 'João Silva')")
    period: Optional[str] = Field(None, description="Period label (e.g., 'Fevereiro')")
    file_name: Optional[str] = Field(None, description="Drive file name (e.g., 'João_Fev.jpg')")
    cell: Optional[str] = Field(None, description="Ledger cell written or already filled")
    summary_cell: Optional[str] = Field(None, description="Summary cell marked")
    drive_file_id: Optional[str] = Field(None, description="Drive file id of the receipt image")
    error: Optional[str] = Field(None, description="Error message when status is error or duplicate")
    ignored_reason: Optional[str] = Field(None, description="Why the message was ignored")

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "example": {
                "status": "success",
                "payer_name": "João Silva",
                "period": "Fevereiro",
                "file_name": "João_Fev.jpg",
                "cell": "Comprovantes!C2",
                "summary_cell": "Main!C2",
                "drive_file_id": "1AbCdEf",
                "error": None,
                "ignored_reason": None
            }
        }
