from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from .database import Document

# Response shapes, messages and the error family rendered by the API.

PRODUCT_CREATED = "product created successfully"
PRODUCT_UPDATED = "product updated successfully"
PRODUCT_DELETED = "product deleted successfully"


class Product(BaseModel):
    """List view of a stored product.

    Stored documents are never validated, so the fields accept whatever
    value the document holds.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    name: Any = None
    price: Any = None
    retailer: Any = None
    amountInStock: Any = None


PRODUCT_FIELDS = ("name", "price", "retailer", "amountInStock")


def _make_product(doc: Document) -> Product:
    fields = {k: doc.data[k] for k in PRODUCT_FIELDS if k in doc.data}
    return Product(id=doc.id, **fields)


def product_to_dict(doc: Document) -> Dict[str, Any]:
    # Fields missing from the document are left out of the entry.
    return _make_product(doc).model_dump(exclude_unset=True)


class ProductApiError(Exception):
    status_code = 400
    default_message = "request failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidPayload(ProductApiError):
    pass


class OperationFailed(ProductApiError):
    pass


class NoProductsFound(ProductApiError):
    # An empty collection is reported as a failure, not as an empty list.
    default_message = "no products found"


class ProductNotFound(ProductApiError):
    status_code = 404
    default_message = "product not found"
