"""Network clients."""

from cabra_i18n.clients.http import HttpClient, HttpFetchError

__all__ = ["HttpClient", "HttpFetchError"]
