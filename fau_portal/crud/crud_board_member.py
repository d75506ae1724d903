# fau_portal/crud/crud_board_member.py
from typing import List

from sqlalchemy.orm import Session

from .base import CRUDBase
from fau_portal.models.board_member import BoardMember
from fau_portal.schemas.board_member import BoardMemberCreate, BoardMemberUpdate


class CRUDBoardMember(CRUDBase[BoardMember, BoardMemberCreate, BoardMemberUpdate]):
    resource_name = "Board member"

    def get_multi_ordered(self, db: Session) -> List[BoardMember]:
        return (
            db.query(self.model)
            .order_by(self.model.sort_order.asc(), self.model.created_at.asc())
            .all()
        )


board_member = CRUDBoardMember(BoardMember)
