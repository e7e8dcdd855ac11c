"""
Access code service - issuing codes and tracking their payment state.
"""

import logging
import random
import string
from collections import Counter
from typing import Optional, List, Dict
from core.domain.models import AccessCode, AccessCodeCreate, AccessCodeStatus
from core.domain.constants import ACCESS_CODE_LENGTH, ACCESS_CODE_MAX_ATTEMPTS
from core.interfaces.repositories import IAccessCodeRepository

logger = logging.getLogger(__name__)


class AccessCodeService:
    """Service for access code (payment control) operations"""

    def __init__(self, code_repo: IAccessCodeRepository):
        self.code_repo = code_repo

    def generate_code(self) -> str:
        """Generate a random access code"""
        return ''.join(random.choices(string.ascii_uppercase + string.digits, k=ACCESS_CODE_LENGTH))

    async def _unique_code(self) -> str:
        for _ in range(ACCESS_CODE_MAX_ATTEMPTS):
            code = self.generate_code()
            if not await self.code_repo.get_by_code(code):
                return code
        raise RuntimeError("Could not generate a unique access code")

    async def create_code(self, data: AccessCodeCreate) -> AccessCode:
        """Issue a pending code for a document"""
        code = await self._unique_code()
        created = await self.code_repo.create({
            "code": code,
            "document_id": data.document_id.strip(),
            "status": AccessCodeStatus.PENDING.value,
            "is_group": data.is_group,
            "people_count": data.people_count,
            "assigned_to_group": False,
        })
        logger.info(
            f"[CODES] Issued {code} for document {created.document_id} "
            f"(group={created.is_group}, people={created.people_count})"
        )
        return created

    async def list_codes(self, status: Optional[AccessCodeStatus] = None) -> List[AccessCode]:
        codes = await self.code_repo.get_all()
        if status:
            codes = [c for c in codes if c.status == status]
        return codes

    async def get_by_code(self, code: str) -> Optional[AccessCode]:
        return await self.code_repo.get_by_code(code.strip().upper())

    async def get_by_id(self, code_id: str) -> Optional[AccessCode]:
        return await self.code_repo.get_by_id(code_id)

    async def mark_paid(self, code_id: str) -> tuple[bool, str]:
        """Confirm payment of a pending code"""
        code = await self.code_repo.get_by_id(code_id)
        if not code:
            return False, "code_not_found"
        if code.status != AccessCodeStatus.PENDING:
            return False, "code_not_pending"
        await self.code_repo.update(code_id, {"status": AccessCodeStatus.PAID.value})
        logger.info(f"[CODES] Payment confirmed for {code.code}")
        return True, "code_marked_paid"

    async def delete_code(self, code_id: str) -> tuple[bool, str]:
        """Delete a code unless somebody already registered with it"""
        code = await self.code_repo.get_by_id(code_id)
        if not code:
            return False, "code_not_found"
        if code.status == AccessCodeStatus.USED:
            return False, "code_in_use"
        await self.code_repo.delete(code_id)
        logger.info(f"[CODES] Deleted {code.code}")
        return True, "code_deleted"

    async def totals_by_status(self) -> Dict[str, int]:
        codes = await self.code_repo.get_all()
        counts = Counter(c.status.value for c in codes)
        return {s.value: counts.get(s.value, 0) for s in AccessCodeStatus}

    async def total_spots(self) -> int:
        """Places sold: every code counts its people"""
        codes = await self.code_repo.get_all()
        return sum(c.people_count for c in codes)
