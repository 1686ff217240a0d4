import structlog
from fastapi import Depends
from langchain_core.messages import HumanMessage

from shared.attachments import Attachment, validate_attachment
from shared.errors import CartAnalysisError
from shared.observability import ecomm_llm_tokens_total

from .agents import CART_ANALYSIS_PROMPT, get_cart_llm
from .schemas import CartAnalysisResult

logger = structlog.get_logger(__name__)


class CartAnalyzer:
    """Reads the total and items off a cart screenshot with a vision model.
    Advisory only: order submission never depends on it."""

    def __init__(self, llm):
        self.llm = llm

    def _record_usage(self, raw):
        usage = getattr(raw, "usage_metadata", None) or {}
        model = getattr(self.llm, "model_name", "unknown")
        if usage.get("input_tokens"):
            ecomm_llm_tokens_total.labels(model=model, type="prompt").inc(usage["input_tokens"])
        if usage.get("output_tokens"):
            ecomm_llm_tokens_total.labels(model=model, type="completion").inc(usage["output_tokens"])

    async def analyze(self, screenshot: Attachment) -> CartAnalysisResult:
        validate_attachment(screenshot, "screenshot of your cart")
        message = HumanMessage(content=[
            {"type": "image_url", "image_url": {"url": screenshot.data_uri()}},
            {"type": "text", "text": CART_ANALYSIS_PROMPT},
        ])
        structured = self.llm.with_structured_output(CartAnalysisResult, include_raw=True)
        try:
            response = await structured.ainvoke([message])
        except Exception as e:
            logger.error("cart_analysis_failed", error=str(e))
            raise CartAnalysisError(
                "Could not analyze the provided image. Please ensure it's a clear screenshot of your cart."
            ) from e

        self._record_usage(response.get("raw"))
        result = response.get("parsed")
        if not isinstance(result, CartAnalysisResult):
            logger.error("cart_analysis_unparsed", error=str(response.get("parsing_error")))
            raise CartAnalysisError(
                "Could not analyze the provided image. Please ensure it's a clear screenshot of your cart."
            )
        return result


def get_cart_analyzer(llm=Depends(get_cart_llm)) -> CartAnalyzer:
    return CartAnalyzer(llm)
