"""
Product CRUD endpoints - create, bulk create, get, replace, delete.
Thin controller; the repository does the index translation.
"""

from fastapi import APIRouter, HTTPException, Request, Response, status

from product_search.core.dependencies import Products
from product_search.core.exceptions import BackendError, ProductNotFoundError
from product_search.schemas.product import BulkIndexResponse, Product

router = APIRouter()


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(product: Product, products: Products, request: Request, response: Response):
    """Index one product. Location points at the get-by-id route."""
    if not product.title.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Product title is required")
    saved = await products.index_product(product)
    response.headers["Location"] = str(request.url_for("get_product", product_id=saved.id))
    return saved


@router.post("/bulk", response_model=BulkIndexResponse)
async def create_products(items: list[Product], products: Products):
    """Index many products in one request. Any failed item fails the call with per-item outcomes."""
    if not items:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No products provided")
    results = await products.index_products(items)
    failed = [r for r in results if not r.indexed]
    if failed:
        raise BackendError(
            "Failed to create products",
            details={"items": [r.model_dump(mode="json", by_alias=True) for r in results]},
        )
    return BulkIndexResponse(message=f"Successfully indexed {len(results)} products", items=results)


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, products: Products):
    product = await products.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(f"Product {product_id} not found")
    return product


@router.put("/{product_id}", response_model=Product)
async def update_product(product_id: str, product: Product, products: Products):
    """Full replace. The path id wins over any id in the body."""
    product.id = product_id
    return await products.update_product(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: str, products: Products):
    await products.delete_product(product_id)
