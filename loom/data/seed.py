# loom/data/seed.py
from datetime import timedelta

from sqlalchemy.orm import Session

from loom.data.database import utc_now
from loom.data.models.auction_piece import AuctionPieceModel, STATUS_LIVE
from loom.data.models.product import ProductModel
from loom.data.models.user import ROLE_ARTISAN, UserModel
from loom.repos.product_repo import ProductRepo
from loom.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_ARTISAN_ID = "demo-artisan"

DEMO_PRODUCTS = [
    {
        "name": "Madhubani Painting",
        "description": "Hand-painted on handmade paper with natural pigments.",
        "price": 250000,
        "stock": 5,
        "category": "paintings",
        "region": "bihar",
        "materials": ["handmade paper", "natural pigments"],
        "image_url": "https://images.example.com/madhubani.jpg",
    },
    {
        "name": "Blue Pottery Vase",
        "description": "Glazed quartz-based pottery from Jaipur.",
        "price": 180000,
        "stock": 8,
        "category": "pottery",
        "region": "rajasthan",
        "materials": ["quartz", "glass", "multani mitti"],
        "image_url": "https://images.example.com/blue-pottery.jpg",
    },
    {
        "name": "Pashmina Shawl",
        "description": "Hand-woven pashmina with sozni embroidery.",
        "price": 1200000,
        "stock": 3,
        "category": "textiles",
        "region": "kashmir",
        "materials": ["pashmina wool"],
        "image_url": "https://images.example.com/pashmina.jpg",
    },
]


def seed(db: Session) -> bool:
    """Loads demo data into an empty catalog. Returns False when data already exists."""
    if ProductRepo(db).count_products():
        return False

    db.add(UserModel(id=DEMO_ARTISAN_ID, display_name="Demo Artisan", role=ROLE_ARTISAN))
    for data in DEMO_PRODUCTS:
        db.add(ProductModel(artisan_id=DEMO_ARTISAN_ID, artisan_name="Demo Artisan", **data))
    db.add(
        AuctionPieceModel(
            artisan_id=DEMO_ARTISAN_ID,
            artisan_name="Demo Artisan",
            name="Tanjore Painting with Gold Foil",
            description="Traditional Thanjavur painting with 22 carat gold foil.",
            image_url="https://images.example.com/tanjore.jpg",
            category="paintings",
            region="tamil nadu",
            materials=["gold foil", "wood", "cloth"],
            duration_hours=72,
            status=STATUS_LIVE,
            reserve_price=5000000,
            end_time=utc_now() + timedelta(hours=72),
        )
    )
    db.commit()
    logger.info(f"Seeded {len(DEMO_PRODUCTS)} demo products and 1 auction piece")
    return True
