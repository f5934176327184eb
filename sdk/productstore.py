# sdk/productstore.py
from typing import Any, Dict, List, Optional

import httpx
import requests

NO_PRODUCTS_MESSAGE = "no products found"


class ProductStoreError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ProductStoreClient:
    """
    Client for the product API.

    ``session`` may be any object with a requests-style ``request`` method
    (a ``requests.Session``, or FastAPI's ``TestClient`` in tests).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080/api",
        timeout: int = 10,
        session: Any = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.transport = transport

    def _url(self, product_id: Optional[str] = None) -> str:
        if product_id is None:
            return f"{self.base_url}/products"
        return f"{self.base_url}/products/{product_id}"

    @staticmethod
    def _check(r) -> None:
        if r.status_code >= 400:
            raise ProductStoreError(r.status_code, r.text)

    def create_product(self, data: Dict[str, Any]) -> str:
        r = self.session.request("POST", self._url(), json=data, timeout=self.timeout)
        self._check(r)
        return r.text

    def list_products(self) -> List[Dict[str, Any]]:
        r = self.session.request("GET", self._url(), timeout=self.timeout)
        # the API answers an empty collection with a 400
        if r.status_code == 400 and r.text == NO_PRODUCTS_MESSAGE:
            return []
        self._check(r)
        return r.json()

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.request("GET", self._url(product_id), timeout=self.timeout)
        self._check(r)
        return r.json()

    def update_product(self, product_id: str, data: Dict[str, Any], method: str = "PATCH") -> str:
        if method not in ("PATCH", "PUT"):
            raise ValueError("method must be PATCH or PUT")
        r = self.session.request(method, self._url(product_id), json=data, timeout=self.timeout)
        self._check(r)
        return r.text

    def delete_product(self, product_id: str) -> str:
        r = self.session.request("DELETE", self._url(product_id), timeout=self.timeout)
        self._check(r)
        return r.text

    # Async variants
    def _async_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def list_products_async(self) -> List[Dict[str, Any]]:
        async with self._async_client() as client:
            r = await client.get(self._url())
        if r.status_code == 400 and r.text == NO_PRODUCTS_MESSAGE:
            return []
        self._check(r)
        return r.json()

    async def get_product_async(self, product_id: str) -> Dict[str, Any]:
        async with self._async_client() as client:
            r = await client.get(self._url(product_id))
        self._check(r)
        return r.json()
