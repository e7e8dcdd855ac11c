"""Spanish strings (primary UI language)."""

ES_STRINGS = {
    # === REGISTRATION WIZARD ===
    "registration_closed": "El período de inscripciones está cerrado",
    "missing_fields": "Por favor completa todos los campos",
    "code_verified": "Código verificado correctamente",
    "person_already_registered": "Esta persona ya está registrada. Puedes actualizar tu información.",
    "group_already_registered": "Este grupo ya fue registrado. Puedes actualizar la información.",
    "document_mismatch": "El número de documento no coincide con el código",
    "payment_not_confirmed": "El código no tiene un pago confirmado",
    "invalid_code": "Código de confirmación inválido o no encontrado",
    "group_code_for_individual": "Este código corresponde a un grupo",
    "individual_code_for_group": "Este código corresponde a una inscripción individual",
    "document_already_registered": "Ya existe una inscripción con este documento",
    "all_fields_required": "Todos los campos son requeridos",
    "route_unavailable": "La ruta seleccionada ya no tiene cupos para ese día",
    "registration_completed": "¡Inscripción completada exitosamente!",
    "code_not_used": "Este código no ha sido usado o no está verificado",
    "registration_not_found": "No se encontró una inscripción para este documento",
    "routes_updated": "Rutas actualizadas correctamente",
    "data_updated": "Datos actualizados correctamente",
    "personal_updated": "Datos personales actualizados correctamente",
    "group_created": "Grupo creado. Ahora agrega a los caminantes de tu grupo.",
    "group_not_found": "No se encontró el grupo",
    "group_full": "El grupo ya está completo",
    "member_added": "Caminante agregado al grupo",

    # === HOME ===
    "preregistration_saved": "¡Pre-inscripción exitosa! Te contactaremos pronto.",

    # === ADMIN: CODES ===
    "code_created": "Código {code} generado",
    "code_not_found": "Código no encontrado",
    "code_not_pending": "El código ya no está pendiente de pago",
    "code_marked_paid": "Pago confirmado",
    "code_in_use": "No se puede eliminar un código ya usado",
    "code_deleted": "Código eliminado",

    # === ADMIN: ROUTES / PEOPLE / SETTINGS ===
    "route_created": "La nueva ruta ha sido agregada exitosamente.",
    "route_updated": "La ruta ha sido actualizada exitosamente.",
    "route_deleted": "La ruta ha sido eliminada exitosamente.",
    "route_not_found": "Ruta no encontrada",
    "person_updated": "Datos de la persona actualizados",
    "person_deleted": "Inscripción eliminada",
    "settings_saved": "Los precios y datos han sido actualizados exitosamente.",

    # === SOUVENIRS ===
    "souvenir_not_found": "No se encontró ninguna inscripción con ese número de documento.",
    "souvenir_already_delivered": "El souvenir para {name} ya fue marcado como entregado anteriormente.",
    "souvenir_payment_pending": "Esta persona aún no ha confirmado su pago. No se puede entregar el souvenir.",
    "souvenir_ready": "¿Confirmar entrega de souvenir a {name} (Documento: {document_id})?",
    "souvenir_delivered": "Souvenir marcado como entregado para {name}",

    # === GENERIC ===
    "error_generic": "Hubo un problema al procesar la solicitud. Por favor intenta nuevamente.",
    "unauthorized": "No autorizado",
    "too_many_requests": "Demasiados intentos. Espera un momento e intenta de nuevo.",
    "not_configured": "No configurado",
}
