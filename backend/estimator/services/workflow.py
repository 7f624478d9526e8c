import logging
import time
from typing import Any, Dict, Optional

import requests

from estimator import config

logger = logging.getLogger(__name__)


class QuoteWorkflowClient:
    """Forwards finished quotes to the quote-saving / mail webhook."""

    def __init__(self, webhook_url: Optional[str] = None, max_retries: Optional[int] = None):
        self.webhook = webhook_url if webhook_url is not None else config.QUOTE_WEBHOOK_URL
        self.max_retries = max_retries or config.QUOTE_WEBHOOK_RETRIES
        logger.debug("QuoteWorkflowClient initialized with webhook=%s max_retries=%s", self.webhook, self.max_retries)

    def submit(self, payload: Dict[str, Any]) -> bool:
        if not self.webhook:
            logger.warning("No quote webhook configured; quote %s not submitted", payload.get("estimateId"))
            return False

        headers = {"Content-Type": "application/json"}
        # idempotency key so the receiver drops retried duplicates
        if "estimateId" in payload:
            headers["Idempotency-Key"] = f"estimate-{payload['estimateId']}"

        for attempt in range(1, self.max_retries + 1):
            try:
                logger.debug("Submitting quote attempt=%s url=%s", attempt, self.webhook)
                resp = requests.post(self.webhook, json=payload, timeout=5, headers=headers)
                resp.raise_for_status()
                logger.info("Submitted quote url=%s status=%s", self.webhook, resp.status_code)
                return True
            except requests.RequestException as e:
                logger.warning("Attempt %s: failed to submit quote: %s", attempt, e)
            if attempt < self.max_retries:
                time.sleep(0.5 * attempt)
        logger.error("All %s attempts to submit quote %s failed", self.max_retries, payload.get("estimateId"))
        return False
