# freshcart/utils/retry.py
"""
Polityka ponawiania dla odczytow katalogu i wywolan redisa (snapshoty, lock).

Zapis zamowienia i mail z potwierdzeniem nie maja retry: blad wraca do
uzytkownika, ktory sam decyduje o ponowieniu.
"""
import logging

import redis
import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from freshcart.utils.logging import get_logger
from freshcart.utils.settings import (
    HTTP_RETRY_ATTEMPTS,
    HTTP_RETRY_MAX_WAIT,
    REDIS_RETRY_ATTEMPTS,
    REDIS_RETRY_MAX_WAIT,
)

logger = get_logger(__name__)


def http_retry(attempts: int = HTTP_RETRY_ATTEMPTS):
    # tylko bledy transportu, odpowiedz 4xx/5xx sprawdza wolajacy
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=HTTP_RETRY_MAX_WAIT),
        retry=retry_if_exception_type(requests.RequestException),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )


def redis_retry(attempts: int = REDIS_RETRY_ATTEMPTS):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=REDIS_RETRY_MAX_WAIT),
        retry=retry_if_exception_type(redis.RedisError),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
