from .setup import setup_observability
from .metrics import (
    ecomm_orders_submitted_total,
    ecomm_payment_proofs_total,
    ecomm_orders_processed_total,
    ecomm_saga_compensation_total,
    ecomm_corrupt_records_skipped_total,
    ecomm_service_open,
    ecomm_llm_tokens_total
)
