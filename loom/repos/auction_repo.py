# loom/repos/auction_repo.py
from datetime import datetime
from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from loom.data.models.auction_piece import AuctionPieceModel, BIDDABLE_STATUSES


class AuctionRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_piece(self, piece_id: str) -> AuctionPieceModel | None:
        return self.db.get(AuctionPieceModel, piece_id)

    def create_piece(self, piece: AuctionPieceModel) -> AuctionPieceModel:
        self.db.add(piece)
        self.db.commit()
        self.db.refresh(piece)
        return piece

    def list_pieces(self, statuses: Iterable[str]) -> List[AuctionPieceModel]:
        return list(
            self.db.execute(
                select(AuctionPieceModel)
                .where(AuctionPieceModel.status.in_(list(statuses)))
                .order_by(AuctionPieceModel.created_at.desc())
            ).scalars()
        )

    def get_expired_open_piece_ids(self, now: datetime) -> List[str]:
        return list(
            self.db.execute(
                select(AuctionPieceModel.id).where(
                    AuctionPieceModel.status.in_(BIDDABLE_STATUSES),
                    AuctionPieceModel.end_time.is_not(None),
                    AuctionPieceModel.end_time <= now,
                )
            ).scalars()
        )
