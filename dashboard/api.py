from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Optional, Union
import logging
import os
import sys

# Ensure project root is in path for cloud deployment
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config.settings import config
from config.logger import setup_logger
from core.engine import ChargesEngine
from core.models import InvalidInput, TransactionInput

logger = logging.getLogger(__name__)

# Shared engine: configuration only, safe across requests
engine = ChargesEngine()


class ComputeRequest(BaseModel):
    """Raw form values; numbers may arrive as strings and are coerced on ingestion."""
    transaction_type: str
    instrument: str = "equity"
    amount: Union[float, str, None] = None
    purchase_cost: Union[float, str, None] = None
    payer_category: Optional[str] = None
    is_individual: Optional[bool] = None
    depository_charge: Union[float, str, None] = config.DEFAULT_DEPOSITORY_CHARGE
    units: Union[int, float, str, None] = 0
    penalty_enabled: bool = False
    penalty_percent: Union[float, str, None] = None


app = FastAPI(title="Trade Charges Calculator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/status")
async def get_status():
    return {"status": "success", "min_lot_size": engine.min_lot_size}

@app.get("/slabs")
async def get_slabs():
    return {
        instrument.value: table.to_list()
        for instrument, table in engine.rate_resolver.slab_tables.items()
    }

@app.post("/compute")
async def compute(request: ComputeRequest):
    """Bridge for the calculator form: one fresh input snapshot per call."""
    try:
        txn = TransactionInput.from_raw(request.model_dump())
        breakdown = engine.compute(txn)
    except InvalidInput as e:
        logger.info(f"Rejected compute request: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    return breakdown.to_dict()

if __name__ == "__main__":
    import uvicorn
    setup_logger()
    uvicorn.run(app, host="0.0.0.0", port=8000)
