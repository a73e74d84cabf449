# freshcart/repos/profile_repo.py
from sqlalchemy.orm import Session
from freshcart.data.models.profile import ProfileModel

PROFILE_FIELDS = ("full_name", "phone", "street", "city", "state", "postal_code")


class ProfileRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, user_id: str) -> ProfileModel | None:
        return self.db.get(ProfileModel, user_id)

    def update_profile(self, user_id: str, data: dict) -> ProfileModel:
        #upsert - profil moze jeszcze nie istniec
        profile = self.get_profile(user_id)
        if profile is None:
            profile = ProfileModel(id=user_id)
            self.db.add(profile)

        for field in PROFILE_FIELDS:
            if field in data and data[field] is not None:
                setattr(profile, field, data[field])

        self.db.commit()
        self.db.refresh(profile)
        return profile

    def rollback(self) -> None:
        self.db.rollback()
