from __future__ import annotations

import logging

import requests

from prodman.config import ApiConfig
from prodman.domain.errors import RemoteUnavailableError
from prodman.domain.models import Product

log = logging.getLogger("prodman.api")

JSON_HEADERS = {"Content-Type": "application/json"}


class ProductApiService:
    def __init__(self, config: ApiConfig, session: requests.Session | None = None):
        self.config = config
        self.http = session or requests.Session()

    def _send(self, method: str, url: str, payload: dict | None = None) -> requests.Response:
        kwargs = {"timeout": self.config.timeout}
        if payload is not None:
            kwargs["json"] = payload
            kwargs["headers"] = JSON_HEADERS
        try:
            r = self.http.request(method, url, **kwargs)
        except requests.RequestException as e:
            log.warning("api_request_failed error=%s", e, extra={"method": method, "url": url})
            raise
        log.info("api_request", extra={"method": method, "url": url, "status": r.status_code})
        return r

    def list_products(self) -> list[Product]:
        url = self.config.products_url()
        try:
            r = self._send("GET", url)
            r.raise_for_status()
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            raise RemoteUnavailableError(f"Could not load products from {url}: {e}") from e

        if not isinstance(data, list):
            raise RemoteUnavailableError(f"Products response is not a list. Raw: {data}")
        return [Product.from_dict(item) for item in data if isinstance(item, dict)]

    # Writes hand back the raw response; callers decide what a status means.
    def create_product(self, payload: dict) -> requests.Response:
        return self._send("POST", self.config.products_url(), payload)

    def update_product(self, product_id: int, payload: dict) -> requests.Response:
        return self._send("PUT", self.config.products_url(product_id), payload)

    def delete_product(self, product_id: int) -> requests.Response:
        return self._send("DELETE", self.config.products_url(product_id))
