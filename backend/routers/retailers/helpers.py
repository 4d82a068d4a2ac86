from fastapi import Depends
from config import get_store, ALLOW_VERIFICATION_REREVIEW
from storage import MemStorage
from models import Retailer, UserRole, VerificationDocument, VerificationStatus
from utils.errors import Conflict, RetailerNotFound, UserNotFound
from utils.transitions import validate_transition, verification_table
from typing import List, Optional, Sequence
import logging

logger = logging.getLogger(__name__)


class RetailerHelpers:
    """Retailer registration, profile edits and verification"""

    def __init__(self, store: MemStorage, allow_rereview: bool = ALLOW_VERIFICATION_REREVIEW):
        self.store = store
        self.allow_rereview = allow_rereview

    def get_retailer(self, retailer_id: int) -> Retailer:
        retailer = self.store.retailers.get(retailer_id)
        if retailer is None:
            raise RetailerNotFound(retailer_id)
        return retailer

    def get_retailer_by_user(self, user_id: int) -> Optional[Retailer]:
        return self.store.retailers.find_one(lambda r: r.user_id == user_id)

    def register_retailer(
        self,
        user_id: int,
        verification_documents: Sequence[VerificationDocument] = (),
        **business_fields
    ) -> Retailer:
        """
        Create a pending retailer profile for an existing user and promote the
        user to the retailer role. Both writes happen under the store lock once
        every check has passed.
        """
        with self.store.lock:
            user = self.store.users.get(user_id)
            if user is None:
                raise UserNotFound(user_id)
            if self.get_retailer_by_user(user_id):
                raise Conflict("Retailer account already exists for this user")

            now = self.store.now()
            documents = [self._stamp(doc, now) for doc in verification_documents]
            retailer = self.store.retailers.create(
                user_id=user_id,
                verification_status=VerificationStatus.PENDING,
                verification_documents=documents,
                registration_date=now,
                **business_fields
            )
            self.store.users.update(user_id, role=UserRole.RETAILER.value)

        logger.info(f"Registered retailer {retailer.id} ({retailer.business_name}) for user {user_id}")
        return retailer

    def update_retailer(self, retailer_id: int, **fields) -> Retailer:
        with self.store.lock:
            retailer = self.get_retailer(retailer_id)
            updated = self.store.retailers.update(retailer.id, **fields)
        logger.info(f"Updated retailer {retailer_id}: {sorted(fields)}")
        return updated

    def set_verification_status(self, retailer_id: int, new_status: str) -> Retailer:
        with self.store.lock:
            retailer = self.get_retailer(retailer_id)
            validate_transition(
                verification_table(self.allow_rereview),
                "verificationStatus",
                retailer.verification_status,
                new_status,
            )
            updated = self.store.retailers.update(retailer.id, verification_status=new_status)

        logger.info(f"Retailer {retailer_id} verification {retailer.verification_status} -> {updated.verification_status}")
        return updated

    def add_verification_document(self, retailer_id: int, document: VerificationDocument) -> Retailer:
        """Append a document; the retailer's own status is left as it is"""
        with self.store.lock:
            retailer = self.get_retailer(retailer_id)
            documents = list(retailer.verification_documents) + [self._stamp(document, self.store.now())]
            updated = self.store.retailers.update(retailer.id, verification_documents=documents)

        logger.info(f"Retailer {retailer_id} uploaded {document.document_type} ({len(documents)} documents)")
        return updated

    def list_by_status(self, verification_status: str) -> List[Retailer]:
        return self.store.retailers.list_where(lambda r: r.verification_status == verification_status)

    def list_pending(self) -> List[Retailer]:
        return self.list_by_status(VerificationStatus.PENDING)

    def list_verified(self) -> List[Retailer]:
        return self.list_by_status(VerificationStatus.VERIFIED)

    @staticmethod
    def _stamp(document: VerificationDocument, now) -> VerificationDocument:
        if document.upload_date is None:
            return document.model_copy(update={"upload_date": now})
        return document


def get_retailer_helpers(store: MemStorage = Depends(get_store)) -> RetailerHelpers:
    return RetailerHelpers(store)
