import pytest

from src.observability.alerting import RejectionAlertManager
from src.observability.metrics import VerificationMetrics
from src.utils.factories import MessageFactory
from src.webhook_verifier import Webhook
from tests.support.receiver import VerifyingWebhookReceiver


WEBHOOK_SECRET = "whsec_MfKQ9r8GKYqrTwjUPD8ILPZIo2LaLaSw"


@pytest.fixture
def webhook_secret():
    return WEBHOOK_SECRET


@pytest.fixture
def metrics():
    return VerificationMetrics(window_seconds=300)


@pytest.fixture
def alert_manager(metrics):
    return RejectionAlertManager(metrics=metrics)


@pytest.fixture
def webhook(metrics):
    return Webhook(WEBHOOK_SECRET, metrics=metrics)


@pytest.fixture
def receiver(webhook):
    server = VerifyingWebhookReceiver(webhook)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def message_factory():
    return MessageFactory
