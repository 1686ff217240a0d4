from prometheus_client import Counter, Gauge

# Business Metrics
ecomm_orders_submitted_total = Counter(
    "ecomm_orders_submitted_total",
    "Total order submissions",
    ["status"] # Labels: 'success', 'rejected', 'failed'
)

ecomm_payment_proofs_total = Counter(
    "ecomm_payment_proofs_total",
    "Total payment proofs stored (re-submissions included)"
)

ecomm_orders_processed_total = Counter(
    "ecomm_orders_processed_total",
    "Total orders marked processed by an admin"
)

ecomm_saga_compensation_total = Counter(
    "ecomm_saga_compensation_total",
    "Total saga compensations triggered",
    ["step_name"] # Labels: 'upload_screenshot', etc.
)

ecomm_corrupt_records_skipped_total = Counter(
    "ecomm_corrupt_records_skipped_total",
    "Order records skipped while listing because they could not be read"
)

ecomm_service_open = Gauge(
    "ecomm_service_open",
    "1 while the shop accepts new orders, 0 while closed"
)

ecomm_llm_tokens_total = Counter(
    "ecomm_llm_tokens_total",
    "Total LLM tokens used",
    ["model", "type"] # Labels: type='prompt' or 'completion'
)
