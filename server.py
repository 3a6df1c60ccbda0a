"""
FastAPI Server for Deal Text Extraction

Provides endpoints for:
- Extracting address, buyer, seller and date from a sentence
- Mapping an (edited) field set to PDF form field names
- Listing and clearing recent extraction requests

Run with: uvicorn server:app --reload
"""

import logging
from typing import Dict, Any, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from config import load_settings, configure_logging
from nodes.extractor import extract_fields
from field_mapping import map_to_pdf_fields, assess_extraction_health
from history_storage import add_history, load_history, clear_history, set_history_limit

settings = load_settings()
configure_logging(settings)
set_history_limit(settings.history_limit)

logger = logging.getLogger(__name__)

EXAMPLE_TEXT = "The property at 123 Main St was sold by John Doe to Jane Smith on June 15, 2025."

# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Deal Text Extractor API",
    description="Extracts property address, buyer, seller and date from free text",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Pydantic Models for API
# ============================================================================

class ExtractRequest(BaseModel):
    """Free-text sentence to extract from."""
    text: str


class ExtractResponse(BaseModel):
    """Extracted fields. Debug spans are never part of the response."""
    address: str
    buyer: str
    seller: str
    date: str  # YYYY-MM-DD or ""
    confidence: float


class FieldSetRequest(BaseModel):
    """A field set edited by the user, submitted without re-running extraction."""
    address: str = ""
    buyer: str = ""
    seller: str = ""
    date: str = ""
    confidence: float = 0.0


class FieldMappingResponse(BaseModel):
    pdf_fields: Dict[str, str]
    health: Dict[str, Any]


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.service_name}


@app.get("/api/extract")
def extract_usage():
    """Describe how to call the extraction endpoint."""
    return {
        "message": 'Extract API endpoint. Use POST with { "text": "your text here" }',
        "example": {"text": EXAMPLE_TEXT},
        "response_format": {
            "address": "string or empty",
            "buyer": "string or empty",
            "seller": "string or empty",
            "date": "YYYY-MM-DD or empty",
            "confidence": "0.0 to 1.0",
        },
    }


@app.post("/api/extract", response_model=ExtractResponse)
def extract(request: ExtractRequest):
    """
    Extract fields from a sentence.

    Extraction itself never fails; a degraded result has empty fields and
    zero confidence.
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text parameter cannot be empty")

    result = extract_fields(request.text)
    add_history(request.text)

    logger.info(f"Extracted fields with confidence {result.confidence}")
    return result.to_dict(include_spans=False)


@app.post("/api/fields/map", response_model=FieldMappingResponse)
def map_fields(request: FieldSetRequest):
    """Map an edited field set to PDF form field names and report its health."""
    data = request.model_dump()
    health = assess_extraction_health(data, settings.low_confidence_threshold)
    return {
        "pdf_fields": map_to_pdf_fields(data),
        "health": health.to_dict(),
    }


@app.get("/api/history", response_model=List[str])
def get_history():
    """Recent extraction texts, newest first."""
    return load_history()


@app.delete("/api/history")
def delete_history():
    clear_history()
    return {"status": "cleared"}
