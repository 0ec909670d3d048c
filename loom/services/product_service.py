from typing import Any, Dict, List

from sqlalchemy.orm import Session

from loom.data.models.product import ProductModel
from loom.data.models.user import ROLE_ARTISAN, UserModel
from loom.domain.errors import InvalidArgument, NotFound, PermissionDenied
from loom.domain.schemas import ProductCreate, ProductUpdate
from loom.repos.product_repo import ProductRepo
from loom.repos.transaction import Transaction, run_transaction
from loom.utils.logging import get_logger

logger = get_logger(__name__)


def product_to_dict(product: ProductModel) -> Dict[str, Any]:
    return {
        column.name: getattr(product, column.name)
        for column in ProductModel.__table__.columns
        if column.name != "version"
    }


def edit_product(tx: Transaction, product_id: str, artisan_id: str, changes: Dict[str, Any]):
    """
    Writes an owner's edit through the optimistic transaction so the row
    version moves and a checkout that read the old stock has to retry.
    """
    product = tx.get(ProductModel, product_id)
    if product is None:
        raise NotFound("Product not found", context={"productId": product_id})
    if product.artisan_id != artisan_id:
        raise PermissionDenied("You can only edit your own products")
    tx.update(ProductModel, product_id, **changes)


class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepo(db)

    def create_product(self, user: UserModel, payload: ProductCreate) -> Dict[str, Any]:
        if user.role != ROLE_ARTISAN:
            raise PermissionDenied("You must be an artisan to create a product")

        product = self.repo.create_product(
            ProductModel(
                artisan_id=user.id,
                artisan_name=user.display_name or user.email,
                name=payload.name,
                description=payload.description,
                price=payload.price,
                stock=payload.stock,
                category=payload.category.lower(),
                region=payload.region.lower() if payload.region else None,
                materials=[m.strip() for m in payload.materials if m.strip()],
                image_url=payload.image_url,
                is_featured=False,
            )
        )
        logger.info(f"New product created with ID: {product.id} by artisan {user.id}")
        return {"success": True, "product_id": product.id}

    def update_product(self, user: UserModel, product_id: str, payload: ProductUpdate) -> Dict[str, Any]:
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise InvalidArgument("Nothing to update", context={"productId": product_id})
        if changes.get("stock", 0) < 0:
            raise InvalidArgument("Stock cannot be negative", context={"stock": changes["stock"]})
        if "category" in changes:
            changes["category"] = changes["category"].lower()
        if "region" in changes:
            changes["region"] = changes["region"].lower()
        if "materials" in changes:
            changes["materials"] = [m.strip() for m in changes["materials"] if m.strip()]

        run_transaction(self.db, lambda tx: edit_product(tx, product_id, user.id, changes))
        logger.info(f"Product {product_id} updated by artisan {user.id}: {sorted(changes)}")
        return {"success": True}

    def get_product(self, product_id: str) -> Dict[str, Any]:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found", context={"productId": product_id})
        return product_to_dict(product)

    def search_products(
        self,
        category: str | None = None,
        region: str | None = None,
        min_price: int | None = None,
        max_price: int | None = None,
    ) -> List[Dict[str, Any]]:
        if min_price is not None and max_price is not None and min_price > max_price:
            raise InvalidArgument(
                "minPrice cannot be greater than maxPrice",
                context={"minPrice": min_price, "maxPrice": max_price},
            )
        products = self.repo.search_products(category, region, min_price, max_price)
        return [product_to_dict(p) for p in products]
