import time

import pytest

from fetch_metadata.attributes import load_providers


GCP_URL = 'http://169.254.169.254/computeMetadata/v1/instance/'
AWS_URL = 'http://169.254.169.254/latest/meta-data/'


class FakeResponse:
    def __init__(self, status_code=200, body=b'', read_error=None, read_delay=0):
        self.status_code = status_code
        self._body = body
        self._read_error = read_error
        self._read_delay = read_delay
        self.closed = False

    @property
    def content(self):
        if self._read_delay:
            time.sleep(self._read_delay)
        if self._read_error is not None:
            raise self._read_error
        return self._body

    def close(self):
        self.closed = True


class FakeSession:
    """Stands in for requests.Session; unknown URLs answer 404."""

    def __init__(self, routes=None, delay=0):
        self.routes = dict(routes or {})
        self.delay = delay
        self.requests = []
        self.closed = False

    def get(self, url, headers=None, timeout=None, stream=False):
        self.requests.append({'url': url, 'headers': headers, 'timeout': timeout})
        if self.delay:
            time.sleep(self.delay)
        route = self.routes.get(url, FakeResponse(404))
        if isinstance(route, Exception):
            raise route
        return route

    def close(self):
        self.closed = True

    @property
    def urls(self):
        return [request['url'] for request in self.requests]


@pytest.fixture
def providers():
    return load_providers()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path
