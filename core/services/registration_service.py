"""
Registration service - the access-code gated registration wizard.

verify code -> individual or group-leader form -> persist registration
-> mark code used -> move per-route, per-day counters.

Every step re-verifies the code: the web layer is stateless and never
trusts a previously verified code coming back from the browser.
"""

import logging
from datetime import datetime
from typing import Optional, List, Dict
from core.domain.models import (
    AccessCode, AccessCodeStatus,
    Registration, RegistrationType, PaymentStatus, RegistrationStep,
    InscriptionForm, VerificationResult,
    Group, Walker,
)
from core.domain.constants import (
    INDEPENDENT_GROUP_ID,
    REGISTRATION_DAYS,
)
from core.interfaces.repositories import (
    IRegistrationRepository,
    IGroupRepository,
    IAccessCodeRepository,
)
from core.services.route_service import RouteService
from core.services.settings_service import SettingsService

logger = logging.getLogger(__name__)


class RegistrationService:
    """Service for the registration flow and group pages"""

    def __init__(
        self,
        registration_repo: IRegistrationRepository,
        group_repo: IGroupRepository,
        code_repo: IAccessCodeRepository,
        route_service: RouteService,
        settings_service: SettingsService,
    ):
        self.registration_repo = registration_repo
        self.group_repo = group_repo
        self.code_repo = code_repo
        self.route_service = route_service
        self.settings_service = settings_service

    # === VERIFY ===

    async def verify_access_code(self, document_id: str, confirmation_code: str) -> VerificationResult:
        """Check a document + code pair and decide the next wizard step"""
        is_open, _ = await self.settings_service.registration_status()
        if not is_open:
            return VerificationResult(success=False, message_key="registration_closed")

        document_id = (document_id or "").strip()
        confirmation_code = (confirmation_code or "").strip().upper()
        if not document_id or not confirmation_code:
            return VerificationResult(success=False, message_key="missing_fields")

        logger.info(f"[REGISTRATION] Verifying code '{confirmation_code}' for document {document_id}")
        code = await self.code_repo.get_by_code(confirmation_code)

        if code and code.document_id == document_id and code.is_verified:
            existing = await self.registration_repo.get_by_document(document_id)
            if existing:
                if code.is_group:
                    logger.info(f"[REGISTRATION] Group already registered, group={existing.group_id}")
                    return VerificationResult(
                        success=True,
                        message_key="group_already_registered",
                        step=RegistrationStep.GROUP_LEADER,
                        access_code=code,
                        existing_registration=existing,
                        redirect_group_id=existing.group_id,
                    )
                return VerificationResult(
                    success=True,
                    message_key="person_already_registered",
                    step=RegistrationStep.INDIVIDUAL,
                    access_code=code,
                    existing_registration=existing,
                )
            return VerificationResult(
                success=True,
                message_key="code_verified",
                step=RegistrationStep.GROUP_LEADER if code.is_group else RegistrationStep.INDIVIDUAL,
                access_code=code,
            )

        if code and code.document_id != document_id:
            logger.warning(f"[REGISTRATION] Document mismatch for code '{confirmation_code}'")
            return VerificationResult(success=False, message_key="document_mismatch")
        if code and not code.is_verified:
            return VerificationResult(success=False, message_key="payment_not_confirmed")
        return VerificationResult(success=False, message_key="invalid_code")

    # === ROUTES ===

    async def _check_routes(self, form: InscriptionForm, current: Optional[Registration] = None) -> bool:
        """Chosen routes must still be offered (unchanged choices are always fine)"""
        available = None
        for day in REGISTRATION_DAYS:
            route_id = self._form_route(form, day)
            if not route_id:
                continue
            if current and current.route_for_day(day) == route_id:
                continue
            if available is None:
                available = await self.route_service.get_available_routes()
            if not await self.route_service.is_offered(route_id, day, available):
                logger.warning(f"[REGISTRATION] Route {route_id} not offered on day {day}")
                return False
        return True

    @staticmethod
    def _form_route(form: InscriptionForm, day: int) -> Optional[str]:
        return (form.route_id_day1 if day == 1 else form.route_id_day2) or None

    async def _reserve(self, form: InscriptionForm, places: int) -> None:
        for day in REGISTRATION_DAYS:
            await self.route_service.adjust_spots(self._form_route(form, day), places, day)

    async def places_held(self, registration: Registration) -> int:
        """How many route places a registration holds per chosen day"""
        if registration.registration_type == RegistrationType.INDIVIDUAL:
            return 1
        if registration.registration_type == RegistrationType.GROUP_LEADER:
            group = await self.group_repo.get_by_id(registration.group_id)
            return group.member_count if group else 1
        return 0

    # === INDIVIDUAL ===

    async def submit_individual(self, form: InscriptionForm) -> tuple[bool, str, Optional[Registration]]:
        """Individual form submit: registers new people, updates returning ones"""
        verification = await self.verify_access_code(form.document_id, form.confirmation_code)
        if not verification.success:
            return False, verification.message_key, None
        code = verification.access_code
        if code.is_group:
            return False, "group_code_for_individual", None
        if code.status == AccessCodeStatus.USED:
            return await self.update_registration(code, form)
        if verification.existing_registration:
            return False, "document_already_registered", None
        return await self.register_individual(code, form)

    async def register_individual(self, code: AccessCode, form: InscriptionForm) -> tuple[bool, str, Optional[Registration]]:
        if not (form.full_name and form.phone and form.rh and form.document_type):
            return False, "all_fields_required", None
        if not await self._check_routes(form):
            return False, "route_unavailable", None

        registration = await self.registration_repo.create(Registration(
            document_id=form.document_id,
            document_type=form.document_type,
            full_name=form.full_name,
            phone=form.phone,
            rh=form.rh,
            route_id_day1=form.route_id_day1 or None,
            route_id_day2=form.route_id_day2 or None,
            access_code=code.code,
            group_id=INDEPENDENT_GROUP_ID,
            payment_status=PaymentStatus.PAID,
            registration_type=RegistrationType.INDIVIDUAL,
            created_at=datetime.now(),
        ))
        await self.code_repo.update(code.id, {"status": AccessCodeStatus.USED.value})
        await self._reserve(form, 1)

        logger.info(f"[REGISTRATION] Individual registered: {form.document_id}")
        return True, "registration_completed", registration

    async def update_registration(self, code: AccessCode, form: InscriptionForm) -> tuple[bool, str, Optional[Registration]]:
        """
        Returning visitor edits personal data or routes.
        Returns: (success, message_key, registration)
        """
        if code.status != AccessCodeStatus.USED:
            return False, "code_not_used", None

        existing = await self.registration_repo.get_by_document(form.document_id)
        if not existing:
            return False, "registration_not_found", None
        if not await self._check_routes(form, current=existing):
            return False, "route_unavailable", None

        new_routes = {day: self._form_route(form, day) for day in REGISTRATION_DAYS}
        updated = await self.registration_repo.update_by_document(form.document_id, {
            "full_name": form.full_name or existing.full_name,
            "phone": form.phone or existing.phone,
            "rh": form.rh or existing.rh,
            "route_id_day1": new_routes[1],
            "route_id_day2": new_routes[2],
            "updated_at": datetime.now().isoformat(),
        })

        places = await self.places_held(existing)
        changes = []
        for day in REGISTRATION_DAYS:
            old_route, new_route = existing.route_for_day(day), new_routes[day]
            if old_route == new_route:
                continue
            await self.route_service.adjust_spots(old_route, -places, day)
            await self.route_service.adjust_spots(new_route, places, day)
            changes.append((day, old_route, new_route))

        if any(old and new for _, old, new in changes):
            key = "routes_updated"
        elif changes:
            key = "data_updated"
        else:
            key = "personal_updated"
        logger.info(f"[REGISTRATION] Updated {form.document_id}: {key} changes={changes}")
        return True, key, updated

    # === GROUP LEADER ===

    async def register_group_leader(self, form: InscriptionForm) -> tuple[bool, str, Optional[Group]]:
        """
        Leader form submit: creates the group and the leader registration,
        then reserves people_count places on the chosen routes.
        Returns: (success, message_key, group)
        """
        verification = await self.verify_access_code(form.document_id, form.confirmation_code)
        if not verification.success:
            return False, verification.message_key, None
        code = verification.access_code
        if not code.is_group:
            return False, "individual_code_for_group", None
        if verification.existing_registration:
            group = await self.group_repo.get_by_id(verification.redirect_group_id)
            return False, "group_already_registered", group

        if not (form.leader_full_name and form.phone and form.rh and form.group_name and form.document_type):
            return False, "all_fields_required", None
        if not await self._check_routes(form):
            return False, "route_unavailable", None

        group = await self.group_repo.create(
            group_name=form.group_name,
            leader_document_id=form.document_id,
            member_count=code.people_count,
        )
        await self.registration_repo.create(Registration(
            document_id=form.document_id,
            document_type=form.document_type,
            full_name=form.leader_full_name,
            phone=form.phone,
            rh=form.rh,
            route_id_day1=form.route_id_day1 or None,
            route_id_day2=form.route_id_day2 or None,
            access_code=code.code,
            group_id=group.id,
            payment_status=PaymentStatus.PAID,
            registration_type=RegistrationType.GROUP_LEADER,
            group_name=form.group_name,
            leader_full_name=form.leader_full_name,
            created_at=datetime.now(),
        ))
        await self.code_repo.update(code.id, {
            "status": AccessCodeStatus.USED.value,
            "assigned_to_group": True,
        })
        await self._reserve(form, code.people_count)

        logger.info(f"[REGISTRATION] Group '{group.group_name}' created ({group.member_count} people), leader {form.document_id}")
        return True, "group_created", group

    # === GROUP PAGE ===

    async def get_group(self, group_id: str) -> tuple[Optional[Group], Optional[Registration], List[Registration]]:
        """Returns: (group, leader registration, member registrations)"""
        group = await self.group_repo.get_by_id(group_id)
        if not group:
            return None, None, []
        registrations = await self.registration_repo.get_by_group(group_id)
        leader = next((r for r in registrations if r.registration_type == RegistrationType.GROUP_LEADER), None)
        members = [r for r in registrations if r.registration_type == RegistrationType.GROUP_MEMBER]
        return group, leader, members

    async def add_group_member(self, group_id: str, walker: Walker) -> tuple[bool, str, Optional[Registration]]:
        """Register a walker under a group; members ride on the leader's reservation"""
        group, leader, members = await self.get_group(group_id)
        if not group or not leader:
            return False, "group_not_found", None
        if 1 + len(members) >= group.member_count:
            return False, "group_full", None
        if await self.registration_repo.get_by_document(walker.document_id):
            return False, "document_already_registered", None

        member = await self.registration_repo.create(Registration(
            document_id=walker.document_id,
            document_type=walker.document_type,
            full_name=walker.full_name,
            phone=walker.phone,
            rh=walker.rh,
            route_id_day1=leader.route_id_day1,
            route_id_day2=leader.route_id_day2,
            access_code=leader.access_code,
            group_id=group.id,
            payment_status=PaymentStatus.PAID,
            registration_type=RegistrationType.GROUP_MEMBER,
            group_name=group.group_name,
            leader_full_name=leader.full_name,
            created_at=datetime.now(),
        ))
        logger.info(f"[REGISTRATION] Member {walker.document_id} added to group {group.id}")
        return True, "member_added", member


    # === COUNTERS ===

    async def expected_route_counters(self) -> Dict[str, Dict[int, int]]:
        """Taken places per route and day, recomputed from the registrations"""
        counters: Dict[str, Dict[int, int]] = {}
        for registration in await self.registration_repo.get_all():
            places = await self.places_held(registration)
            if not places:
                continue
            for day in REGISTRATION_DAYS:
                route_id = registration.route_for_day(day)
                if route_id:
                    day_counts = counters.setdefault(route_id, {})
                    day_counts[day] = day_counts.get(day, 0) + places
        return counters
