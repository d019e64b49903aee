"""
Product API endpoints following FastAPI best practices
Clean API layer with dependency injection
"""

from contextlib import contextmanager
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from insurance_api.core.errors import ErrorResponse, ErrorResponseModel, InternalServerError
from insurance_api.core.logger import logger
from insurance_api.dependencies.auth import ensure_admin, require_role
from insurance_api.dependencies.product import get_product_service
from insurance_api.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from insurance_api.services.product import ProductService

router = APIRouter()


@contextmanager
def service_errors(operation: str):
    """Pass domain errors through, wrap anything else as a 500 keeping its message"""
    try:
        yield
    except ErrorResponse:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error during {operation}: {e}",
            error=e,
            metadata={"event": f"{operation}_failed"}
        )
        raise InternalServerError(str(e)) from e


@router.post(
    "/create",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role)],
    summary="Creates a product",
    responses={
        400: {"model": ErrorResponseModel},
        401: {"model": ErrorResponseModel},
        409: {"model": ErrorResponseModel},
        500: {"model": ErrorResponseModel},
    },
)
@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role)],
    include_in_schema=False,
)
async def create_product(
    request: Request,
    product: ProductCreate,
    service: ProductService = Depends(get_product_service),
):
    """
    Create a new product. The (productCode, location) pair must be unique.
    Requires an admin token.
    """
    ensure_admin(request)
    with service_errors("create_product"):
        created = await service.create(product)
    return ProductResponse.from_product(created)


@router.get(
    "/get",
    response_model=ProductResponse,
    summary="Fetches a product",
    responses={
        400: {"model": ErrorResponseModel},
        404: {"model": ErrorResponseModel},
        500: {"model": ErrorResponseModel},
    },
)
@router.get("", response_model=ProductResponse, include_in_schema=False)
async def get_product(
    product_code: Optional[int] = Query(None, alias="productCode"),
    location: Optional[str] = Query(None),
    service: ProductService = Depends(get_product_service),
):
    """
    Get a product by product code and/or location. Public route.
    """
    with service_errors("get_product"):
        product = await service.find_one(product_code, location)
    return ProductResponse.from_product(product)


@router.put(
    "/update",
    response_model=ProductResponse,
    dependencies=[Depends(require_role)],
    summary="Updates a product",
    responses={
        400: {"model": ErrorResponseModel},
        401: {"model": ErrorResponseModel},
        404: {"model": ErrorResponseModel},
        409: {"model": ErrorResponseModel},
        500: {"model": ErrorResponseModel},
    },
)
@router.put(
    "",
    response_model=ProductResponse,
    dependencies=[Depends(require_role)],
    include_in_schema=False,
)
async def update_product(
    request: Request,
    product: ProductUpdate,
    product_code: Optional[int] = Query(None, alias="productCode"),
    location: Optional[str] = Query(None, description="Current location of the product"),
    service: ProductService = Depends(get_product_service),
):
    """
    Update a product identified by productCode and its current location.
    Requires an admin token.
    """
    ensure_admin(request)
    with service_errors("update_product"):
        updated = await service.update(product_code, location, product)
    return ProductResponse.from_product(updated)


@router.delete(
    "/remove",
    dependencies=[Depends(require_role)],
    summary="Removes a product",
    responses={
        400: {"model": ErrorResponseModel},
        401: {"model": ErrorResponseModel},
        404: {"model": ErrorResponseModel},
        500: {"model": ErrorResponseModel},
    },
)
@router.delete("", dependencies=[Depends(require_role)], include_in_schema=False)
async def remove_product(
    request: Request,
    product_code: Optional[int] = Query(None, alias="productCode"),
    location: Optional[str] = Query(None),
    service: ProductService = Depends(get_product_service),
):
    """
    Remove products by productCode. Without a location every product
    sharing the code is removed. Requires an admin token.
    """
    ensure_admin(request)
    with service_errors("remove_product"):
        await service.remove(product_code, location)
    return Response(status_code=status.HTTP_200_OK)
