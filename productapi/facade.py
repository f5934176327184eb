"""
Product operations behind the HTTP routes.

Each operation makes exactly one document store call. Whatever that call
raises is turned into ``OperationFailed`` carrying the same message, so
callers see a 400 with the store's text. The only other outcomes are an
empty collection on list and an absent document on get.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List

from .core import (
    PRODUCT_CREATED,
    PRODUCT_DELETED,
    PRODUCT_UPDATED,
    NoProductsFound,
    OperationFailed,
    ProductNotFound,
    product_to_dict,
)
from .database import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "products"


@contextmanager
def _store_call(operation: str):
    try:
        yield
    except Exception as e:
        logger.warning("%s failed: %s: %s", operation, type(e).__name__, e)
        raise OperationFailed(str(e)) from e


async def create_product_logic(
    store: DocumentStore, data: Any, collection: str = DEFAULT_COLLECTION
) -> str:
    with _store_call("create"):
        doc_id = await store.add(collection, data)
    logger.info("Created product %s", doc_id)
    return PRODUCT_CREATED


async def list_products_logic(
    store: DocumentStore, collection: str = DEFAULT_COLLECTION
) -> List[Dict[str, Any]]:
    with _store_call("list"):
        docs = await store.get_all(collection)
    if not docs:
        raise NoProductsFound()
    # Store iteration order, no sorting.
    return [product_to_dict(doc) for doc in docs]


async def get_product_logic(
    store: DocumentStore, product_id: str, collection: str = DEFAULT_COLLECTION
) -> Dict[str, Any]:
    with _store_call("get"):
        doc = await store.get(collection, product_id)
    if doc is None:
        raise ProductNotFound()
    return doc.data


async def update_product_logic(
    store: DocumentStore, product_id: str, data: Any, collection: str = DEFAULT_COLLECTION
) -> str:
    # No existence check: an absent document fails inside the store call.
    with _store_call("update"):
        await store.update(collection, product_id, data)
    logger.info("Updated product %s", product_id)
    return PRODUCT_UPDATED


async def delete_product_logic(
    store: DocumentStore, product_id: str, collection: str = DEFAULT_COLLECTION
) -> str:
    with _store_call("delete"):
        await store.delete(collection, product_id)
    logger.info("Deleted product %s", product_id)
    return PRODUCT_DELETED
