"""Products: catalog CRUD.

Invariants:
    - Negative prices rejected with 400 (schema and core both check)
    - Unknown product ids return 404
"""

from fastapi import APIRouter, Depends, status

from salesdesk.api.dependencies import get_catalog
from salesdesk.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from salesdesk.services.catalog import CatalogService

router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.post(
    "", response_model=ProductResponse, status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate, catalog: CatalogService = Depends(get_catalog),
):
    product = await catalog.create_product(
        name=body.name,
        price=body.price,
        description=body.description,
        image=body.image,
        product_type=body.product_type,
        status=body.status,
    )
    return ProductResponse.from_domain(product)


@router.get("", response_model=list[ProductResponse])
async def list_products(catalog: CatalogService = Depends(get_catalog)):
    return [ProductResponse.from_domain(p) for p in await catalog.list_products()]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str, catalog: CatalogService = Depends(get_catalog),
):
    return ProductResponse.from_domain(await catalog.get_product(product_id))


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: ProductUpdate,
    catalog: CatalogService = Depends(get_catalog),
):
    product = await catalog.update_product(
        product_id, **body.model_dump(exclude_unset=True),
    )
    return ProductResponse.from_domain(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str, catalog: CatalogService = Depends(get_catalog),
):
    await catalog.delete_product(product_id)
