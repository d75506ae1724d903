# fau_portal/api/v1/endpoints/board_members.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from fau_portal import crud
from fau_portal.api import deps
from fau_portal.db.session import get_db
from fau_portal.schemas.board_member import BoardMember, BoardMemberCreate, BoardMemberUpdate
from fau_portal.schemas.token import TokenPayload

router = APIRouter(prefix="/board-members", tags=["Board Members"])


@router.get("", response_model=List[BoardMember])
def list_board_members(db: Session = Depends(get_db)):
    return crud.board_member.get_multi_ordered(db)


@router.post("", response_model=BoardMember, status_code=status.HTTP_201_CREATED)
def create_board_member(
    member_in: BoardMemberCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    return crud.board_member.create(db, obj_in=member_in)


@router.put("/{member_id}", response_model=BoardMember)
def update_board_member(
    member_id: str,
    member_in: BoardMemberUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    member = crud.board_member.get_or_404(db, id=member_id)
    update_data = member_in.model_dump(exclude_unset=True, exclude_none=True)
    return crud.board_member.update(db, db_obj=member, obj_in=update_data)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_board_member(
    member_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.require_admin),
):
    crud.board_member.remove(db, id=member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
