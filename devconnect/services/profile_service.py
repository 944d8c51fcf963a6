"""
Profile Service - one profile per user, with embedded experience and
education lists.

Profiles are read, edited in memory and written back whole (no
concurrency control: the last write wins). New experience/education
entries go to the front of their list and get their own ObjectId.
"""

from datetime import datetime, timezone
from typing import Dict, List, NamedTuple, Optional

import structlog
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection

from devconnect.core.errors import NotFoundError
from devconnect.db.mongodb import COLLECTIONS, get_collection, serialize_doc, serialize_docs, to_object_id

logger = structlog.get_logger()

NO_PROFILE_FOR_USER_MESSAGE = "There is no profile for this user."
NO_PROFILE_MESSAGE = "No profile found."
EXPERIENCE_NOT_FOUND_MESSAGE = "Experience not found."
EDUCATION_NOT_FOUND_MESSAGE = "Education not found."

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


class ProfileField(NamedTuple):
    """An optional profile field: trimmed, and left unset when blank."""
    name: str
    group: Optional[str] = None  # "social" fields nest under profile.social

    def clean(self, raw) -> Optional[str]:
        if raw is None:
            return None
        value = str(raw).strip()
        return value or None


PROFILE_FIELDS = tuple(
    [ProfileField(name) for name in ("company", "website", "location", "bio", "status", "githubusername")]
    + [ProfileField(name, group="social") for name in SOCIAL_NETWORKS]
)


def split_skills(skills: Optional[str]) -> List[str]:
    """'python, go ,sql' -> ['python', 'go', 'sql'] (order kept)."""
    if skills is None:
        return []
    return [skill.strip() for skill in skills.split(",")]


def build_profile_fields(data: dict) -> dict:
    """
    Build the sanitized field set for a profile upsert.

    Unknown keys are ignored, blank optional values are dropped rather
    than stored as empty strings, and only known social networks survive.
    """
    fields = {}
    social = {}
    for field in PROFILE_FIELDS:
        value = field.clean(data.get(field.name))
        if value is None:
            continue
        if field.group == "social":
            social[field.name] = value
        else:
            fields[field.name] = value

    fields["skills"] = split_skills(data.get("skills"))
    fields["social"] = social
    return fields


def _provided(fields: dict) -> dict:
    """Keep only values that were actually supplied (non-None, non-blank)."""
    cleaned = {}
    for key, value in fields.items():
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        cleaned[key] = value
    return cleaned


class ProfileService:
    """
    Handles profile documents and their embedded entry lists.
    Profiles reference users by ObjectId in the `user` field.
    """

    def __init__(self, profiles: Collection = None, users: Collection = None):
        self.profiles: Collection = profiles if profiles is not None else get_collection(COLLECTIONS["profiles"])
        self.users: Collection = users if users is not None else get_collection(COLLECTIONS["users"])

    # --------------------------------------------------------
    # Reads
    # --------------------------------------------------------

    def _populate(self, profiles: List[dict]) -> List[dict]:
        """Replace each profile's user id with {_id, name, avatar}."""
        user_ids = list({profile["user"] for profile in profiles})
        users = {
            user["_id"]: user
            for user in self.users.find({"_id": {"$in": user_ids}}, {"name": 1, "avatar": 1})
        }
        for profile in profiles:
            profile["user"] = users.get(profile["user"])
        return profiles

    def get_my_profile(self, user_id: str) -> dict:
        profile = self.profiles.find_one({"user": to_object_id(user_id, NO_PROFILE_FOR_USER_MESSAGE)})
        if not profile:
            raise NotFoundError(NO_PROFILE_FOR_USER_MESSAGE, status_code=400)
        return serialize_doc(self._populate([profile])[0])

    def get_profile_by_user(self, user_id: str) -> dict:
        """Public lookup. Malformed and unknown ids answer the same way."""
        profile = self.profiles.find_one({"user": to_object_id(user_id, NO_PROFILE_MESSAGE)})
        if not profile:
            raise NotFoundError(NO_PROFILE_MESSAGE, status_code=400)
        return serialize_doc(self._populate([profile])[0])

    def list_profiles(self) -> List[dict]:
        return serialize_docs(self._populate(list(self.profiles.find())))

    def _load(self, user_id: str) -> dict:
        profile = self.profiles.find_one({"user": to_object_id(user_id, NO_PROFILE_MESSAGE)})
        if not profile:
            raise NotFoundError(NO_PROFILE_MESSAGE, status_code=400)
        return profile

    # --------------------------------------------------------
    # Create / update
    # --------------------------------------------------------

    def upsert_profile(self, user_id: str, data: dict) -> dict:
        """
        Create the user's profile, or merge the given fields into it.

        On update only supplied keys change; social links are set one by
        one so unspecified networks keep their stored values.
        """
        user = to_object_id(user_id, NO_PROFILE_MESSAGE)
        fields = build_profile_fields(data)

        if self.profiles.find_one({"user": user}, {"_id": 1}):
            update = {key: value for key, value in fields.items() if key != "social"}
            for network, url in fields["social"].items():
                update[f"social.{network}"] = url

            profile = self.profiles.find_one_and_update(
                {"user": user},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
            logger.info("Profile updated", user_id=user_id)
            return serialize_doc(profile)

        doc = {
            "user": user,
            **fields,
            "experience": [],
            "education": [],
            "date": datetime.now(timezone.utc),
        }
        result = self.profiles.insert_one(doc)
        logger.info("Profile created", user_id=user_id)
        return serialize_doc(self.profiles.find_one({"_id": result.inserted_id}))

    # --------------------------------------------------------
    # Embedded entry lists (experience / education)
    # --------------------------------------------------------

    def _save_list(self, profile: dict, list_name: str, entries: List[dict]) -> dict:
        self.profiles.update_one({"_id": profile["_id"]}, {"$set": {list_name: entries}})
        profile[list_name] = entries
        return serialize_doc(profile)

    def _find_entry(self, entries: List[dict], entry_id: str, message: str) -> int:
        target = to_object_id(entry_id, message)
        for index, entry in enumerate(entries):
            if entry.get("_id") == target:
                return index
        raise NotFoundError(message, status_code=400)

    def _add_entry(self, user_id: str, list_name: str, fields: dict) -> dict:
        profile = self._load(user_id)
        entry = {"_id": ObjectId(), **{k: v for k, v in fields.items() if v is not None}}
        entries = [entry] + profile.get(list_name, [])
        return self._save_list(profile, list_name, entries)

    def _edit_entry(self, user_id: str, list_name: str, entry_id: str, fields: dict, message: str) -> dict:
        profile = self._load(user_id)
        entries = profile.get(list_name, [])
        index = self._find_entry(entries, entry_id, message)
        entries[index].update(_provided(fields))
        return self._save_list(profile, list_name, entries)

    def _remove_entry(self, user_id: str, list_name: str, entry_id: str, message: str) -> dict:
        profile = self._load(user_id)
        entries = profile.get(list_name, [])
        index = self._find_entry(entries, entry_id, message)
        entries.pop(index)
        return self._save_list(profile, list_name, entries)

    def add_experience(self, user_id: str, fields: Dict) -> dict:
        return self._add_entry(user_id, "experience", fields)

    def edit_experience(self, user_id: str, exp_id: str, fields: Dict) -> dict:
        return self._edit_entry(user_id, "experience", exp_id, fields, EXPERIENCE_NOT_FOUND_MESSAGE)

    def delete_experience(self, user_id: str, exp_id: str) -> dict:
        return self._remove_entry(user_id, "experience", exp_id, EXPERIENCE_NOT_FOUND_MESSAGE)

    def add_education(self, user_id: str, fields: Dict) -> dict:
        return self._add_entry(user_id, "education", fields)

    def edit_education(self, user_id: str, edu_id: str, fields: Dict) -> dict:
        return self._edit_entry(user_id, "education", edu_id, fields, EDUCATION_NOT_FOUND_MESSAGE)

    def delete_education(self, user_id: str, edu_id: str) -> dict:
        return self._remove_entry(user_id, "education", edu_id, EDUCATION_NOT_FOUND_MESSAGE)

    # --------------------------------------------------------
    # Account deletion
    # --------------------------------------------------------

    def delete_account(self, user_id: str) -> None:
        """
        Remove the user's profile and account.

        TODO: posts written by the user are left in place; decide whether
        account deletion should also remove them.
        """
        user = to_object_id(user_id, NO_PROFILE_MESSAGE)
        self.profiles.delete_one({"user": user})
        self.users.delete_one({"_id": user})
        logger.info("Account deleted", user_id=user_id)


def get_profile_service() -> ProfileService:
    """FastAPI dependency - ProfileService bound to the live collections."""
    return ProfileService()
