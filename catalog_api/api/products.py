from typing import Any, List

from fastapi import APIRouter, Body, Depends, status

from catalog_api.storage import StorageAdapter, get_storage
from catalog_api.services.product_service import ProductService
from catalog_api.schemas.product import (
    ErrorResponse,
    MessageResponse,
    ProductResponse,
)

router = APIRouter(prefix="/products", tags=["Products"])

BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
SERVER_ERROR = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}}


def get_product_service(storage: StorageAdapter = Depends(get_storage)) -> ProductService:
    """Dependency wiring the product service to the request's storage adapter."""
    return ProductService(storage)


@router.get(
    "",
    response_model=List[ProductResponse],
    responses=SERVER_ERROR,
    summary="List all products",
    description="Get every product, ordered by id."
)
def list_products(service: ProductService = Depends(get_product_service)):
    """Get all products."""
    return service.list_products()


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**BAD_REQUEST, **SERVER_ERROR},
    summary="Create a new product",
    description="Create a new product with name, price, optional description and quantity."
)
def create_product(
    payload: Any = Body(None),
    service: ProductService = Depends(get_product_service)
):
    """
    Create a new product.

    - **name**: Product name, non-blank (required)
    - **price**: Numeric price (required)
    - **description**: Free text, defaults to empty (optional)
    - **quantity**: Whole number (required)
    """
    return service.create_product(payload)


@router.put(
    "",
    response_model=ProductResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
    summary="Update a product (id in body)",
    description="Replace every field of the product whose id is given in the body."
)
def update_product_from_body(
    payload: Any = Body(None),
    service: ProductService = Depends(get_product_service)
):
    """
    Update a product identified by the `id` field of the body.

    Kept alongside `PUT /products/{product_id}` for older clients; both
    perform the same full replace.
    """
    raw_id = payload.get("id") if isinstance(payload, dict) else None
    return service.update_product(raw_id, payload)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
    summary="Get product by ID",
    description="Get a specific product."
)
def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service)
):
    """Get a product by ID."""
    return service.get_product(product_id)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
    summary="Update a product",
    description="Replace every field of a product. Omitted description becomes empty."
)
def update_product(
    product_id: str,
    payload: Any = Body(None),
    service: ProductService = Depends(get_product_service)
):
    """
    Update a product.

    This is a full replace, not a merge: name, price and quantity are
    required and description is cleared when omitted.
    """
    return service.update_product(product_id, payload)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
    summary="Delete a product",
    description="Delete a product by ID."
)
def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service)
):
    """Delete a product."""
    return service.delete_product(product_id)
