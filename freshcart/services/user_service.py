from sqlalchemy.orm import Session
from freshcart.data.models.user import UserModel
from freshcart.repos.user_repo import UserRepo
from freshcart.repos.profile_repo import ProfileRepo
from freshcart.domain.schemas import UserCreate, UserRead, ProfileIn, ProfileOut
from freshcart.utils.settings import ALLOW_ADMIN_SIGNUP


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)
        self.profiles = ProfileRepo(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        existing = self.repo.get_user(payload.id)
        if existing:
            return UserRead.model_validate(existing)

        user = UserModel(
            id=payload.id,
            name=payload.name,
            email=payload.email,
            #is_admin z requestu tylko w dev, inaczej zwykly klient
            is_admin=payload.is_admin and ALLOW_ADMIN_SIGNUP,
        )
        created = self.repo.create_user(user)
        return UserRead.model_validate(created)

    def get_user(self, user_id: str) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise ValueError("User not found")
        return UserRead.model_validate(user)

    def get_profile(self, user_id: str) -> ProfileOut:
        self.get_user(user_id)
        profile = self.profiles.get_profile(user_id)
        if not profile:
            return ProfileOut(id=user_id)
        return ProfileOut.model_validate(profile)

    def update_profile(self, user_id: str, payload: ProfileIn) -> ProfileOut:
        self.get_user(user_id)
        profile = self.profiles.update_profile(user_id, payload.model_dump(exclude_unset=True))
        return ProfileOut.model_validate(profile)
