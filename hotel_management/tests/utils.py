from urllib.parse import urlparse

from rest_framework.test import APIClient


class InProcessSession:
    """Stands in for requests.Session, routing calls to the Django test server."""

    def __init__(self, api_client=None):
        self.api_client = api_client or APIClient()
        self.calls = []

    def request(self, method, url, params=None, json=None, timeout=None):
        path = urlparse(url).path
        self.calls.append((method, url))
        if method == 'GET':
            return self.api_client.get(path, params or {})
        if method == 'POST':
            return self.api_client.post(path, json, format='json')
        raise ValueError(f"Unsupported method {method}")
