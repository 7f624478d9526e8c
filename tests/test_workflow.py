from unittest.mock import MagicMock, patch

import requests

from estimator.services.workflow import QuoteWorkflowClient

PAYLOAD = {"estimateId": "E1", "items": []}


def test_without_webhook_nothing_is_sent():
    client = QuoteWorkflowClient(webhook_url="")
    with patch("estimator.services.workflow.requests.post") as post:
        assert client.submit(PAYLOAD) is False
    post.assert_not_called()


def test_submit_sends_idempotency_key():
    client = QuoteWorkflowClient(webhook_url="http://hook.test/quotes", max_retries=3)
    with patch("estimator.services.workflow.requests.post") as post:
        post.return_value = MagicMock(status_code=200)
        assert client.submit(PAYLOAD) is True

    post.assert_called_once()
    kwargs = post.call_args.kwargs
    assert kwargs["json"] == PAYLOAD
    assert kwargs["headers"]["Idempotency-Key"] == "estimate-E1"


def test_submit_retries_then_gives_up():
    client = QuoteWorkflowClient(webhook_url="http://hook.test/quotes", max_retries=3)
    with patch("estimator.services.workflow.requests.post", side_effect=requests.ConnectionError("down")) as post, \
            patch("estimator.services.workflow.time.sleep") as sleep:
        assert client.submit(PAYLOAD) is False

    assert post.call_count == 3
    assert sleep.call_count == 2


def test_submit_recovers_after_http_error():
    failing = MagicMock()
    failing.raise_for_status.side_effect = requests.HTTPError("502")
    client = QuoteWorkflowClient(webhook_url="http://hook.test/quotes", max_retries=3)
    with patch("estimator.services.workflow.requests.post", side_effect=[failing, MagicMock(status_code=200)]) as post, \
            patch("estimator.services.workflow.time.sleep"):
        assert client.submit(PAYLOAD) is True
    assert post.call_count == 2
