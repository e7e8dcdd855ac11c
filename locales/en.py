"""English strings."""

EN_STRINGS = {
    # === REGISTRATION WIZARD ===
    "registration_closed": "Registration is closed",
    "missing_fields": "Please fill in all fields",
    "code_verified": "Code verified",
    "person_already_registered": "You are already registered. You can update your details.",
    "group_already_registered": "This group is already registered. You can update its details.",
    "document_mismatch": "The document number does not match the code",
    "payment_not_confirmed": "The payment for this code has not been confirmed",
    "invalid_code": "Invalid or unknown confirmation code",
    "group_code_for_individual": "This code belongs to a group",
    "individual_code_for_group": "This code belongs to an individual registration",
    "document_already_registered": "A registration with this document already exists",
    "all_fields_required": "All fields are required",
    "route_unavailable": "The selected route has no places left on that day",
    "registration_completed": "Registration completed!",
    "code_not_used": "This code has not been used or is not verified",
    "registration_not_found": "No registration found for this document",
    "routes_updated": "Routes updated",
    "data_updated": "Details updated",
    "personal_updated": "Personal details updated",
    "group_created": "Group created. Now add the walkers of your group.",
    "group_not_found": "Group not found",
    "group_full": "The group is already complete",
    "member_added": "Walker added to the group",

    # === HOME ===
    "preregistration_saved": "Pre-registration saved! We'll be in touch soon.",

    # === ADMIN: CODES ===
    "code_created": "Code {code} issued",
    "code_not_found": "Code not found",
    "code_not_pending": "The code is no longer awaiting payment",
    "code_marked_paid": "Payment confirmed",
    "code_in_use": "A used code cannot be deleted",
    "code_deleted": "Code deleted",

    # === ADMIN: ROUTES / PEOPLE / SETTINGS ===
    "route_created": "Route added.",
    "route_updated": "Route updated.",
    "route_deleted": "Route deleted.",
    "route_not_found": "Route not found",
    "person_updated": "Person updated",
    "person_deleted": "Registration deleted",
    "settings_saved": "Prices and details updated.",

    # === SOUVENIRS ===
    "souvenir_not_found": "No registration found with that document number.",
    "souvenir_already_delivered": "The souvenir for {name} was already delivered.",
    "souvenir_payment_pending": "This person's payment is not confirmed. The souvenir cannot be delivered.",
    "souvenir_ready": "Confirm souvenir delivery to {name} (Document: {document_id})?",
    "souvenir_delivered": "Souvenir delivered to {name}",

    # === GENERIC ===
    "error_generic": "Something went wrong. Please try again.",
    "unauthorized": "Unauthorized",
    "too_many_requests": "Too many attempts. Wait a moment and try again.",
    "not_configured": "Not configured",
}
