from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from ...domain.errors import InvalidInputError
from ...domain.models import DonationRequest, Funding, User
from ...domain.ports.persistence import PersistenceGateway, Query

logger = logging.getLogger(__name__)

USERS = "users"
DONATION_REQUESTS = "donationRequests"
FUNDINGS = "fundings"

NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


class MongoPersistence(PersistenceGateway):
    """MongoDB-backed implementation of the persistence gateway."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._users = database[USERS]
        self._requests = database[DONATION_REQUESTS]
        self._fundings = database[FUNDINGS]
        self._initialize()

    def _initialize(self) -> None:
        self._users.create_index([("email", ASCENDING)], unique=True)
        self._users.create_index([("role", ASCENDING), ("status", ASCENDING)])
        self._requests.create_index([("requesterEmail", ASCENDING), ("createdAt", DESCENDING)])
        self._requests.create_index([("status", ASCENDING), ("createdAt", DESCENDING)])
        self._fundings.create_index([("createdAt", DESCENDING)])

    def ping(self) -> bool:
        try:
            self._db.command("ping")
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            return False
        return True

    # UserRepository API -----------------------------------------------------
    def register_user(self, email: str, profile: Dict[str, Any], created_at: datetime) -> Tuple[User, bool]:
        document = dict(profile)
        document["createdAt"] = created_at
        try:
            result = self._users.update_one(
                {"email": email},
                {"$setOnInsert": document},
                upsert=True,
            )
            created = result.upserted_id is not None
        except DuplicateKeyError:
            # A concurrent registration inserted the same email first.
            created = False
        user = self.get_user_by_email(email)
        if user is None:
            raise PyMongoError(f"User {email} missing after upsert")
        return user, created

    def get_user_by_email(self, email: str) -> Optional[User]:
        document = self._users.find_one({"email": email})
        return _document_to_user(document) if document else None

    def update_user_profile(self, email: str, changes: Dict[str, Any]) -> Optional[User]:
        document = self._users.find_one_and_update(
            {"email": email},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return _document_to_user(document) if document else None

    def update_user(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        document = self._users.find_one_and_update(
            {"_id": _object_id(user_id)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return _document_to_user(document) if document else None

    def find_users(self, query: Query, *, skip: int = 0, limit: int = 0) -> List[User]:
        cursor = self._users.find(dict(query)).sort(NEWEST_FIRST).skip(skip).limit(limit)
        return [_document_to_user(document) for document in cursor]

    def count_users(self, query: Query) -> int:
        return self._users.count_documents(dict(query))

    # DonationRequestRepository API ------------------------------------------
    def create_donation_request(self, document: Dict[str, Any]) -> DonationRequest:
        payload = dict(document)
        result = self._requests.insert_one(payload)
        payload["_id"] = result.inserted_id
        return _document_to_request(payload)

    def get_donation_request(self, request_id: str) -> Optional[DonationRequest]:
        document = self._requests.find_one({"_id": _object_id(request_id)})
        return _document_to_request(document) if document else None

    def find_donation_requests(self, query: Query, *, skip: int = 0, limit: int = 0) -> List[DonationRequest]:
        cursor = self._requests.find(dict(query)).sort(NEWEST_FIRST).skip(skip).limit(limit)
        return [_document_to_request(document) for document in cursor]

    def count_donation_requests(self, query: Query) -> int:
        return self._requests.count_documents(dict(query))

    def update_donation_request(
        self,
        request_id: str,
        precondition: Query,
        changes: Dict[str, Any],
    ) -> Optional[DonationRequest]:
        criteria: Dict[str, Any] = {"_id": _object_id(request_id)}
        criteria.update(precondition)
        document = self._requests.find_one_and_update(
            criteria,
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return _document_to_request(document) if document else None

    def delete_donation_request(self, request_id: str, precondition: Optional[Query] = None) -> bool:
        criteria: Dict[str, Any] = {"_id": _object_id(request_id)}
        if precondition:
            criteria.update(precondition)
        result = self._requests.delete_one(criteria)
        return result.deleted_count == 1

    # FundingRepository API --------------------------------------------------
    def create_funding(self, document: Dict[str, Any]) -> Funding:
        payload = dict(document)
        result = self._fundings.insert_one(payload)
        payload["_id"] = result.inserted_id
        return _document_to_funding(payload)

    def list_fundings(self) -> List[Funding]:
        cursor = self._fundings.find({}).sort(NEWEST_FIRST)
        return [_document_to_funding(document) for document in cursor]

    def total_funding_amount(self) -> int:
        rows = list(
            self._fundings.aggregate([
                {"$group": {"_id": None, "total": {"$sum": "$amount"}}},
            ])
        )
        if not rows:
            return 0
        return int(rows[0].get("total") or 0)


def _object_id(value: str) -> ObjectId:
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidInputError("Invalid id")
    return ObjectId(value)


def _document_to_user(document: Mapping[str, Any]) -> User:
    return User(
        id=str(document["_id"]),
        email=document["email"],
        role=document.get("role") or "donor",
        status=document.get("status") or "active",
        name=document.get("name"),
        blood_group=document.get("bloodGroup"),
        district=document.get("district"),
        upazila=document.get("upazila"),
        photo_url=document.get("photoURL"),
        created_at=document.get("createdAt"),
    )


def _document_to_request(document: Mapping[str, Any]) -> DonationRequest:
    return DonationRequest(
        id=str(document["_id"]),
        requester_email=document["requesterEmail"],
        requester_name=document.get("requesterName"),
        recipient_name=document.get("recipientName", ""),
        hospital_name=document.get("hospitalName", ""),
        full_address=document.get("fullAddress"),
        blood_group=document.get("bloodGroup", ""),
        district=document.get("district", ""),
        upazila=document.get("upazila", ""),
        donation_date=document.get("donationDate", ""),
        donation_time=document.get("donationTime", ""),
        request_message=document.get("requestMessage"),
        status=document.get("status", "pending"),
        donor_name=document.get("donorName"),
        donor_email=document.get("donorEmail"),
        donated_at=document.get("donatedAt"),
        created_at=document.get("createdAt"),
        updated_at=document.get("updatedAt"),
    )


def _document_to_funding(document: Mapping[str, Any]) -> Funding:
    return Funding(
        id=str(document["_id"]),
        amount=int(document.get("amount", 0)),
        donor_name=document.get("donorName"),
        donor_email=document.get("donorEmail"),
        transaction_id=document.get("transactionId"),
        created_at=document.get("createdAt"),
    )
