from functools import lru_cache

from langchain_openai import ChatOpenAI

from shared.config import settings

CART_ANALYSIS_PROMPT = """
Analyze this shopping cart screenshot. Extract the total price (including currency symbol) and list the items.
Return two fields:
- totalPrice: the cart total as shown, including the currency symbol.
- items: one short description per item in the cart.
If you cannot find the total price or items, return an empty string or an empty list for the respective field.
"""


@lru_cache(maxsize=1)
def get_cart_llm() -> ChatOpenAI:
    # Built on first use so the app starts without OPENAI_API_KEY
    return ChatOpenAI(model=settings.CART_ANALYSIS_MODEL, temperature=0)
