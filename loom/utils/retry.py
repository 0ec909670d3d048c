# loom/utils/retry.py
import logging

from requests import RequestException
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from loom.domain.errors import TransactionConflict
from loom.utils import settings
from loom.utils.logging import get_logger

logger = get_logger(__name__)


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(RequestException),
    )


#optimistic transactions: rerun the whole transaction function on conflict
def transaction_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(settings.TX_MAX_ATTEMPTS),
        wait=wait_exponential(multiplier=0.02, min=0.01, max=0.5),
        retry=retry_if_exception_type(TransactionConflict),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
