from fastapi import APIRouter, Depends, File, Request, UploadFile

from shared.attachments import attachment_from_upload
from shared.config import settings
from shared.security import limiter
from .schemas import CartAnalysisResult
from .service import CartAnalyzer, get_cart_analyzer

router = APIRouter()

@router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "cart", "status": "running"}

@router.post("/analyze", response_model=CartAnalysisResult)
@limiter.limit(settings.ORDER_SUBMIT_RATE_LIMIT)
async def analyze_cart(
    request: Request,                          # REQUIRED: slowapi needs this to check IP/Headers
    screenshot: UploadFile = File(...),
    analyzer: CartAnalyzer = Depends(get_cart_analyzer),
):
    return await analyzer.analyze(await attachment_from_upload(screenshot))
