# freshcart/services/product_client.py
from typing import List

import requests

from freshcart.domain.errors import CatalogUnavailableError, ProductNotFoundError
from freshcart.domain.schemas import Product
from freshcart.utils.retry import http_retry
from freshcart.utils.settings import PRODUCT_SERVICE_URL
from freshcart.utils.logging import get_logger

logger = get_logger(__name__)


class ProductClient:
    def __init__(self, base_url: str | None = None, timeout: int = 2, session: requests.Session | None = None):
        self.base_url = (base_url or PRODUCT_SERVICE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @http_retry()
    def _get(self, url: str, params: dict | None = None) -> requests.Response:
        logger.info(f"ProductClient GET {url}")
        return self.session.get(url, params=params, timeout=self.timeout)

    def _get_json(self, url: str, params: dict | None = None, product_id: str | None = None):
        try:
            resp = self._get(url, params=params)
            #404 to odpowiedz, nie blad sieci - bez retry
            if product_id is not None and resp.status_code == 404:
                raise ProductNotFoundError(product_id)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Katalog niedostepny ({url}): {e}")
            raise CatalogUnavailableError(e) from e
        return resp.json()

    def fetch_product(self, product_id: str) -> Product:
        data = self._get_json(f"{self.base_url}/products/{product_id}", product_id=product_id)
        return Product.model_validate(data)

    def list_products(self, category: str | None = None) -> List[Product]:
        params = {"category": category} if category else None
        return [Product.model_validate(p) for p in self._get_json(f"{self.base_url}/products", params=params)]
