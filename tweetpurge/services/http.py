"""
Thin wrapper around requests.Session for outbound Twitter API calls.

Every call gets a bounded timeout and is a single attempt by default. When
max_retries is set, idempotent reads are retried with exponential backoff on
transport failures and gateway errors; anything that changes state on the
platform is still attempted exactly once.
"""

import logging
import time

import requests

from tweetpurge.core.errors import UpstreamError

logger = logging.getLogger(__name__)

IDEMPOTENT_METHODS = frozenset({'GET', 'HEAD'})
RETRYABLE_STATUS_CODES = frozenset({502, 503, 504})


class HttpAdapter:

    def __init__(self, base_url, timeout=10.0, max_retries=0, backoff=0.5, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_retries = max(0, int(max_retries or 0))
        self.backoff = backoff
        self.session = session or requests.Session()

    def request(self, method, path, auth=None, params=None):
        """Send one logical request and return the final requests.Response.

        Raises UpstreamError (status_code None) when the platform cannot be
        reached after the allowed attempts.
        """
        method = method.upper()
        url = f"{self.base_url}/{path.lstrip('/')}"
        attempts = 1 + (self.max_retries if method in IDEMPOTENT_METHODS else 0)

        for attempt in range(attempts):
            if attempt > 0:
                delay = self.backoff * (2 ** (attempt - 1))
                logger.debug("Retrying %s %s in %.2fs (attempt %d/%d)", method, path, delay, attempt + 1, attempts)
                time.sleep(delay)

            try:
                response = self.session.request(method, url, auth=auth, params=params, timeout=self.timeout)
            except (requests.ConnectionError, requests.Timeout) as e:
                logger.warning("%s %s failed: %s", method, path, e)
                if attempt + 1 < attempts:
                    continue
                raise UpstreamError(f"failed to perform request: {e}") from e
            except requests.RequestException as e:
                logger.warning("%s %s failed: %s", method, path, e)
                raise UpstreamError(f"failed to perform request: {e}") from e

            logger.debug("%s %s -> %s", method, path, response.status_code)
            if response.status_code in RETRYABLE_STATUS_CODES and attempt + 1 < attempts:
                continue
            return response
