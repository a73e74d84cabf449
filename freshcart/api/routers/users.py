from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from freshcart.data.database import get_db
from freshcart.services.user_service import UserService
from freshcart.domain.schemas import UserCreate, UserRead, ProfileIn, ProfileOut

router = APIRouter(prefix="/users", tags=["users"])

# dev: konta zaklada zewnetrzny provider auth, is_admin honorowane tylko przy ALLOW_ADMIN_SIGNUP=1
@router.post("/", response_model=UserRead)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.create_user(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/{user_id}/profile", response_model=ProfileOut)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_profile(user_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/{user_id}/profile", response_model=ProfileOut)
def update_profile(user_id: str, payload: ProfileIn, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.update_profile(user_id, payload)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
