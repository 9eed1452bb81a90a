# noqa: D104 - package initialization
from .logging import configure_structured_logging, init_request_ids  # noqa: F401
from .metrics import metrics_blueprint, observe_page_size, record_detail_lookup, record_mutation  # noqa: F401
from .tracing import init_tracing  # noqa: F401
