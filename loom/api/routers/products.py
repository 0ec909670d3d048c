# loom/api/routers/products.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from loom.api.deps import get_current_user
from loom.data.database import get_db
from loom.data.models.user import UserModel
from loom.domain.schemas import (
    ProductCreate,
    ProductCreatedOut,
    ProductListOut,
    ProductOut,
    ProductUpdate,
    SuccessOut,
)
from loom.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductListOut)
def search_products(
    category: Optional[str] = None,
    region: Optional[str] = None,
    min_price: Optional[int] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[int] = Query(None, alias="maxPrice", ge=0),
    db: Session = Depends(get_db),
):
    products = ProductService(db).search_products(category, region, min_price, max_price)
    return {"products": products}


@router.post("", response_model=ProductCreatedOut, status_code=201)
def create_product(
    payload: ProductCreate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProductService(db).create_product(user, payload)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, db: Session = Depends(get_db)):
    return ProductService(db).get_product(product_id)


@router.patch("/{product_id}", response_model=SuccessOut)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Owner-only edit of a listing, e.g. a restock or a price change."""
    return ProductService(db).update_product(user, product_id, payload)
