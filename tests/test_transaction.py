import pytest

from loom.data.database import utc_now
from loom.data.models.auction_piece import AuctionPieceModel
from loom.data.models.order import OrderModel
from loom.data.models.product import ProductModel
from loom.domain.errors import OutOfRange, TransactionConflict
from loom.repos.transaction import Transaction, run_transaction
from loom.services.auction_service import apply_bid
from loom.services.order_service import checkout
from loom.services.product_service import edit_product
from loom.utils import settings


def cart_of(product_id, quantity, price=1000, artisan_id="weaver"):
    return [
        {
            "product_id": product_id,
            "quantity": quantity,
            "price": price,
            "name": f"Product {product_id}",
            "image_url": None,
            "artisan_id": artisan_id,
        }
    ]


def test_written_rows_get_a_new_version(db_session, make_product):
    make_product("shawl", stock=5)

    def decrement(tx):
        product = tx.get(ProductModel, "shawl")
        tx.update(ProductModel, "shawl", stock=product.stock - 1)

    run_transaction(db_session, decrement)

    product = db_session.get(ProductModel, "shawl", populate_existing=True)
    assert product.stock == 4
    assert product.version == 2


def test_rows_only_read_keep_their_version(db_session, make_product):
    make_product("shawl", stock=5)

    stock = run_transaction(db_session, lambda tx: tx.get(ProductModel, "shawl").stock)

    assert stock == 5
    assert db_session.get(ProductModel, "shawl", populate_existing=True).version == 1


def test_write_without_read_is_rejected(db_session, make_product):
    make_product("shawl")

    with pytest.raises(RuntimeError):
        Transaction(db_session).update(ProductModel, "shawl", stock=0)


def test_interleaved_checkouts_never_oversell(session_factory, make_product):
    make_product("shawl", stock=5)
    first, second = session_factory(), session_factory()
    seen_stock = []

    def alice_checkout(tx):
        order_id = checkout(tx, "alice", cart_of("shawl", 3), {"city": "Surat"}, 3000)
        seen_stock.append(tx.get(ProductModel, "shawl").stock)
        if len(seen_stock) == 1:
            # bob commits between alice's read and alice's commit
            run_transaction(
                second, lambda tx2: checkout(tx2, "bob", cart_of("shawl", 3), {"city": "Pune"}, 3000)
            )
        return order_id

    with pytest.raises(OutOfRange) as exc:
        run_transaction(first, alice_checkout)

    # first attempt saw 5 and lost the race, the retry saw bob's write
    assert seen_stock == [5]
    assert exc.value.context == {"productId": "shawl", "available": 2, "requested": 3}

    check = session_factory()
    assert check.get(ProductModel, "shawl").stock == 2
    orders = check.query(OrderModel).all()
    assert [o.user_id for o in orders] == ["bob"]

    for db in (first, second, check):
        db.close()


def test_interleaved_equal_bids_only_one_wins(session_factory, make_piece):
    make_piece("piece-1", reserve_price=1000)
    first, second = session_factory(), session_factory()
    attempts = []

    def alice_bids(tx):
        attempts.append(1)
        highest = apply_bid(tx, "piece-1", "alice", 1500, utc_now())
        if len(attempts) == 1:
            run_transaction(second, lambda tx2: apply_bid(tx2, "piece-1", "bob", 1500, utc_now()))
        return highest

    with pytest.raises(OutOfRange):
        run_transaction(first, alice_bids)

    assert len(attempts) == 2
    check = session_factory()
    piece = check.get(AuctionPieceModel, "piece-1")
    assert piece.current_highest_bid == 1500
    assert piece.current_highest_bidder_id == "bob"

    for db in (first, second, check):
        db.close()


def test_gives_up_after_max_attempts(session_factory, make_product, monkeypatch):
    monkeypatch.setattr(settings, "TX_MAX_ATTEMPTS", 2)
    make_product("shawl", stock=50)
    first, second = session_factory(), session_factory()
    attempts = []

    def restock(tx):
        tx.update(ProductModel, "shawl", stock=tx.get(ProductModel, "shawl").stock + 1)

    def always_loses(tx):
        attempts.append(1)
        product = tx.get(ProductModel, "shawl")
        tx.update(ProductModel, "shawl", stock=product.stock - 1)
        run_transaction(second, restock)

    with pytest.raises(TransactionConflict) as exc:
        run_transaction(first, always_loses)

    assert len(attempts) == 2
    assert exc.value.context == {"table": "products", "key": "shawl"}
    # only the competing restocks landed
    check = session_factory()
    assert check.get(ProductModel, "shawl").stock == 52

    for db in (first, second, check):
        db.close()


def test_restock_during_checkout_is_not_lost(session_factory, make_product):
    make_product("shawl", stock=5, artisan_id="weaver")
    first, second = session_factory(), session_factory()
    seen_stock = []

    def asha_checkout(tx):
        order_id = checkout(tx, "asha", cart_of("shawl", 3), {"city": "Jaipur"}, 3000)
        seen_stock.append(tx.get(ProductModel, "shawl").stock)
        if len(seen_stock) == 1:
            # the artisan restocks between asha's read and asha's commit
            run_transaction(second, lambda tx2: edit_product(tx2, "shawl", "weaver", {"stock": 20}))
        return order_id

    run_transaction(first, asha_checkout)

    assert seen_stock == [5, 20]
    check = session_factory()
    product = check.get(ProductModel, "shawl")
    assert product.stock == 17
    assert product.version == 3

    for db in (first, second, check):
        db.close()
