# loom/repos/product_repo.py
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from loom.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def search_products(
        self,
        category: str | None = None,
        region: str | None = None,
        min_price: int | None = None,
        max_price: int | None = None,
    ) -> List[ProductModel]:
        stmt = select(ProductModel)
        if category:
            stmt = stmt.where(ProductModel.category == category.lower())
        if region:
            stmt = stmt.where(ProductModel.region == region.lower())
        if min_price is not None:
            stmt = stmt.where(ProductModel.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(ProductModel.price <= max_price)
        stmt = stmt.order_by(ProductModel.created_at.desc(), ProductModel.id)
        return list(self.db.execute(stmt).scalars())

    def count_products(self) -> int:
        return self.db.execute(select(func.count()).select_from(ProductModel)).scalar_one()
