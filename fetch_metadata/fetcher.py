import logging
import signal
from contextlib import contextmanager

import requests

from .exceptions import NetworkError, ReadError, UnexpectedStatus


log = logging.getLogger(__name__)

TIMEOUT = 2


@contextmanager
def deadline(seconds, url):
    """
    Raise NetworkError from inside the block once ``seconds`` have passed.

    requests only bounds the connect and each single read, so a body that
    trickles in is never cut off by it. An interval timer bounds the whole
    request instead. Must be used from the main thread.
    """
    def expire(signum, frame):
        raise NetworkError(url, f'request timed out after {seconds}s')

    previous = signal.signal(signal.SIGALRM, expire)
    signal.setitimer(signal.ITIMER_REAL, seconds)
    try:
        yield
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0)
        signal.signal(signal.SIGALRM, previous)


def fetch(session, base_url, key, headers=()) -> bytes:
    """
    GET ``base_url + key`` and return the raw response body.

    Raises NetworkError when the request fails or takes longer than TIMEOUT
    in total, UnexpectedStatus for anything but a 200 and ReadError when the
    body cannot be read.
    """
    url = base_url + key
    request_headers = {header.name: header.value for header in headers}

    log.info('GET %s', url)
    with deadline(TIMEOUT, url):
        try:
            response = session.get(url, headers=request_headers, timeout=TIMEOUT, stream=True)
        except requests.exceptions.RequestException as e:
            raise NetworkError(url, f'request failed: {e}') from e

        try:
            if response.status_code != 200:
                raise UnexpectedStatus(url, response.status_code)
            try:
                return response.content
            except requests.exceptions.RequestException as e:
                raise ReadError(url, f'unable to read response: {e}') from e
        finally:
            response.close()
