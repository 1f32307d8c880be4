"""Criteria catalog - closed mapping from rubric id to evaluation form.

General criteria are weighted (weights sum to 100 per rubric). High-impact
criteria are binary; any failure zeroes the score.
"""

from voxqa.errors import ConfigurationMissingError
from voxqa.schemas.rubric import Criterion, HighImpactCriterion, Rubric, RubricId

# Client audited exhaustively: no per-agent quota.
EXEMPT_CLIENT = "lv"

# Project ids filed under Obama sources that actually belong to LV.
# 34 = LV ventas, 35 = LV customer (36 = LV cobros is not audited).
EXEMPT_PROJECT_IDS = frozenset({34, 35})
LV_CUSTOMER_PROJECT = 35
LV_VENTAS_PROJECT = 34

# Obama agents working the customer (service) campaign; everyone else is sales.
OBAMA_SERVICE_AGENTS = frozenset({
    "1000834615",
    "1052837193",
    "1032679644",
    "1028662379",
    "1023373202",
    "1001343678",
    "1030659472",
    "1024600780",
    "1032938838",
    "1011093984",
})

CLIENT_RUBRICS: dict[str, tuple[RubricId, ...]] = {
    "claro_wcb": (RubricId.CLARO_WCB,),
    "claro_hogar": (RubricId.CLARO_HOGAR,),
    "claro_tyt": (RubricId.CLARO_TYT,),
    "obama": (RubricId.OBAMA_VENTAS, RubricId.OBAMA_CUSTOMER),
    "lv": (RubricId.LV_VENTAS, RubricId.LV_CUSTOMER),
}


def _g(key: str, label: str, weight: int) -> Criterion:
    return Criterion(key=key, label=label, weight=weight)


def _h(key: str, label: str) -> HighImpactCriterion:
    return HighImpactCriterion(key=key, label=label)


CATALOG: dict[RubricId, Rubric] = {
    RubricId.CLARO_WCB: Rubric(
        id=RubricId.CLARO_WCB,
        label="Claro WCB",
        general=(
            _g("cierre_comercial", "Cierre Comercial", 12),
            _g("interes_necesidades", "Interés por conocer las necesidades del cliente", 10),
            _g("oferta_comercial", "Oferta comercial", 10),
            _g("manejo_objeciones", "Manejo de objeciones", 10),
            _g("resalta_beneficios", "Resalta beneficios de Todo Claro", 9),
            _g("escucha_activa", "Escucha Activa", 8),
            _g("argumenta_conocimientos", "Argumenta con sus conocimientos", 8),
            _g("amabilidad_empatia", "Amabilidad y Empatía", 7),
            _g("uso_herramientas", "Uso de Herramientas", 7),
            _g("tiempos_espera", "Tiempos de espera", 5),
            _g("comunicacion_efectiva", "Comunicación efectiva", 5),
            _g("saludo", "Saludo", 3),
            _g("despedida", "Despedida", 3),
            _g("tipificacion", "Tipificación", 3),
        ),
        high_impact=(
            _h("maltrato_cliente", "Maltrato al Cliente"),
            _h("cuelgue_llamada", "Cuelgue de llamada"),
            _h("info_politicas", "Información correcta de políticas vigentes"),
            _h("info_herramientas", "Información correcta de herramientas"),
            _h("induce_cancelar", "Induce al cliente a cancelar el servicio"),
            _h("registro", "Registro"),
            _h("fraude_comercial", "Fraude comercial"),
            _h("lectura_contrato", "Realiza lectura al 100% del contrato"),
            _h("gestion_comercial", "Gestión Comercial"),
            _h("consulta_sox", "Consulta SOX"),
        ),
        holder_only_keys=frozenset({
            "interes_necesidades", "oferta_comercial", "manejo_objeciones",
            "cierre_comercial", "resalta_beneficios",
        }),
        closing_keys=frozenset({
            "cierre_comercial", "manejo_objeciones", "despedida", "tipificacion",
        }),
    ),
    RubricId.CLARO_HOGAR: Rubric(
        id=RubricId.CLARO_HOGAR,
        label="Claro Hogar",
        general=(
            _g("manejo_objeciones", "Manejo de Objeciones", 12),
            _g("escucha_activa", "Escucha Activa", 10),
            _g("interes_necesidades", "Interés por conocer la necesidad del cliente", 10),
            _g("habilidades_comerciales", "Habilidades Comerciales", 10),
            _g("resalta_beneficios", "Resalta Beneficios Todo Claro", 10),
            _g("cierre_comercial", "Cierre Comercial", 10),
            _g("amabilidad_empatia", "Amabilidad y Empatía", 8),
            _g("argumenta_conocimientos", "Argumenta con tus conocimientos", 8),
            _g("saludo", "Saludo", 5),
            _g("tiempos_espera", "Tiempos de espera", 5),
            _g("tipificacion", "Tipificación", 5),
            _g("comunicacion_efectiva", "Comunicación efectiva", 4),
            _g("despedida", "Despedida", 3),
        ),
        high_impact=(
            _h("maltrato_cliente", "Maltrato al Cliente"),
            _h("cuelgue_llamada", "Cuelgue de llamada"),
            _h("proceso_venta", "Realiza Proceso de venta Correctamente"),
            _h(
                "info_herramientas",
                "Brinda información correcta y completa acorde a las herramientas de gestión",
            ),
            _h("induce_cancelar", "Induce al cliente a cancelar el servicio (Permanencia)"),
            _h("malas_practicas", "Malas prácticas"),
            _h("validacion_identidad", "Validación de identidad"),
            _h("fraude_comercial", "Fraude comercial"),
            _h("lectura_contrato", "Realiza lectura al 100% del contrato"),
            _h("gestion_comercial", "Gestión Comercial"),
            _h("consulta_sox", "Consulta SOX"),
        ),
        holder_only_keys=frozenset({
            "interes_necesidades", "habilidades_comerciales", "resalta_beneficios",
            "cierre_comercial", "manejo_objeciones",
        }),
        closing_keys=frozenset({
            "cierre_comercial", "habilidades_comerciales", "manejo_objeciones",
            "despedida", "tipificacion",
        }),
    ),
    RubricId.CLARO_TYT: Rubric(
        id=RubricId.CLARO_TYT,
        label="Claro TYT",
        general=(
            _g("saludo", "Saludo", 12),
            _g("perfilamiento_enfocado", "Perfilamiento Enfocado", 12),
            _g("manejo_objeciones", "Manejo de Objeciones", 12),
            _g("cierre_comercial", "Cierre Comercial", 12),
            _g("escucha_activa", "Escucha Activa", 10),
            _g("oferta_comercial", "Oferta Claro / Ofrecimiento comercial", 10),
            _g("uso_herramientas", "Uso de Herramientas", 7),
            _g("tiempos_espera", "Tiempos de espera", 5),
            _g("comunicacion_efectiva", "Comunicación efectiva", 5),
            _g("amabilidad_empatia", "Amabilidad y Empatía", 5),
            _g("convenios_bancarios", "Convenios bancarios", 5),
            _g("despedida", "Despedida", 5),
        ),
        high_impact=(
            _h("maltrato_cliente", "Maltrato al Cliente"),
            _h("cuelgue_llamada", "Cuelgue de llamada"),
            _h("fraude_comercial", "Fraude Comercial"),
            _h("lenguaje_negativo", "Lenguaje Negativo"),
            _h("induce_cancelar", "Induce al cliente a cancelar el servicio (Retracto)"),
            _h("lectura_contrato", "Realiza lectura al 100% del contrato"),
            _h("proceso_estipulado", "Genera el proceso de acuerdo a lo estipulado"),
            _h("oferta_venta_contado", "Oferta Venta de Contado"),
            _h("gestion_comercial", "Gestión Comercial"),
            _h("habeas_data", "Habeas data"),
            _h("oferta_claro_up", "Oferta Claro up"),
            _h("consulta_sox", "Consulta SOX"),
        ),
        holder_only_keys=frozenset({
            "perfilamiento_enfocado", "oferta_comercial", "manejo_objeciones",
            "cierre_comercial", "convenios_bancarios",
        }),
        closing_keys=frozenset({
            "cierre_comercial", "convenios_bancarios", "manejo_objeciones", "despedida",
        }),
    ),
    RubricId.OBAMA_VENTAS: Rubric(
        id=RubricId.OBAMA_VENTAS,
        label="Obama Ventas",
        general=(
            _g("inicio_llamada", "Inicio De La Llamada", 10),
            _g("contexto_personalizacion", "Contexto De La Llamada Y Personalización", 20),
            _g("empatia_trato", "Empatía Y Trato Al Cliente", 10),
            _g("cierre_experiencia", "Cierre De La Fase De Experiencia", 15),
            _g("requisitos", "Requisitos", 15),
            _g("cotizacion_ingresos", "Cotización Y Validación De Ingresos", 15),
            _g("explicacion_cierre", "Explicación Del Servicio Y Cierre De Venta", 15),
        ),
        high_impact=(
            _h("solicitud_referidos", "Solicitud De Referidos"),
            _h("seguimiento_postventa", "Seguimiento Y Postventa"),
            _h("asignacion_polizas_taxes", "Asignación De Pólizas Según Declaración De Taxes"),
            _h("firma_carta", "Firma De La Carta"),
            _h("solicitud_documentacion", "Solicitud De Documentación"),
            _h("pago_automatico_prima", "Pago Automático En Pólizas Con Prima"),
            _h("falta_empatia", "Falta de empatía con el cliente"),
            _h("falta_gestion_comercial", "Falta de gestión comercial"),
            _h("tipificacion_correcta", "Tipificación Correcta De La Llamada"),
            _h("maltrato_cliente", "Maltrato Al Cliente"),
            _h("guion_aor", "Guion AOR"),
            _h("cuelgue_llamada", "Cuelgue De Llamada"),
            _h("fraude_comercial", "Fraude Comercial"),
            _h("recapitulacion_venta", "Recapitulación De Venta"),
            _h("validacion_requisitos", "Validación De Requisitos De Ingreso"),
            _h("pregunta_taxes", "Pregunta taxes"),
            _h("guion_paro", "Guion de paro"),
            _h("actualizacion_bronce", "Actualización póliza bronce"),
        ),
        holder_only_keys=frozenset({
            "contexto_personalizacion", "cierre_experiencia", "requisitos",
            "cotizacion_ingresos", "explicacion_cierre",
        }),
        closing_keys=frozenset({
            "cierre_experiencia", "requisitos", "cotizacion_ingresos", "explicacion_cierre",
        }),
    ),
    RubricId.OBAMA_CUSTOMER: Rubric(
        id=RubricId.OBAMA_CUSTOMER,
        label="Obama Customer",
        general=(
            _g("saludo_presentacion", "Saludo y Presentación", 10),
            _g("empatia_experiencia", "Empatía y experiencia del cliente", 20),
            _g("recordatorio_plan", "Recordatorio de plan y cobertura", 20),
            _g("comunicacion_efectiva", "Comunicación efectiva", 5),
            _g("resolucion_primer_contacto", "Resolución en primer contacto", 10),
            _g("productividad_marcaciones", "Productividad (marcaciones mínimas)", 10),
            _g("cierre_efectivo", "Cierre Efectivo", 10),
            _g("complementar_dental_vision", "Opción de complementar dental y visión", 15),
        ),
        high_impact=(
            _h("no_referido", "No referido"),
            _h("no_gestion_recuperacion", "No Gestión de recuperación"),
            _h("maltrato_cliente", "Maltrato al cliente"),
            _h("no_marcaciones", "No marcaciones"),
            _h("fraude_comercial", "Fraude comercial"),
            _h("cuelgue_llamada", "Cuelgue llamada"),
            _h("documentos_ingresos", "Documentos e ingresos"),
            _h("guion_aor", "Guion AOR"),
            _h("recapitulacion", "Recapitulación"),
            _h("cobro", "Cobro"),
            _h("falta_gestion_comercial", "Falta de gestión comercial"),
            _h("pregunta_taxes", "Pregunta taxes"),
            _h("falta_empatia", "Falta de empatía con el cliente"),
            _h("guion_paro", "Guion de paro"),
            _h("actualizacion_bronce", "Actualización póliza bronce"),
        ),
        holder_only_keys=frozenset({"recordatorio_plan", "complementar_dental_vision"}),
        closing_keys=frozenset({
            "cierre_efectivo", "complementar_dental_vision", "recordatorio_plan",
        }),
    ),
    RubricId.LV_CUSTOMER: Rubric(
        id=RubricId.LV_CUSTOMER,
        label="LV Customer",
        general=(
            _g("saludo_otp", "Saludo Corporativo y Verificación OTP", 10),
            _g("habilidades_comunicativas", "Habilidades Comunicativas", 40),
            _g("resolucion_primer_contacto", "Resolución en Primer Contacto", 15),
            _g("notificaciones_seguimiento", "Notificaciones y Seguimiento", 5),
            _g("cobros_prevencion_mora", "Gestión de Cobros y Prevención de Mora", 10),
            _g("cierre_llamada", "Cierre de la Llamada", 15),
            _g("experiencia_cliente", "Experiencia del Cliente", 5),
        ),
        high_impact=(
            _h("no_gestion_pago", "No gestionar pago o recordatorio de prima"),
            _h("no_autopay", "No sugerir pago automático (Autopay)"),
            _h("no_riesgos_mora", "No explicar riesgos de mora"),
            _h("no_confirmar_paquete", "No confirmar recepción de tarjetas/paquete de bienvenida"),
            _h("maltrato_cliente", "Maltrato al cliente"),
            _h("cuelgue_llamada", "Colgar la llamada abruptamente"),
            _h("no_referidos", "No solicitar referidos al finalizar"),
            _h("incumplir_horario", "Incumplir horario de contacto del cliente"),
            _h("firma_sin_autorizacion", "Firmar documentos sin autorización"),
            _h("no_registro_crm", "No registrar correctamente en el CRM"),
        ),
        holder_only_keys=frozenset({
            "cobros_prevencion_mora", "cierre_llamada", "notificaciones_seguimiento",
        }),
        closing_keys=frozenset({
            "cierre_llamada", "cobros_prevencion_mora", "notificaciones_seguimiento",
        }),
    ),
    RubricId.LV_VENTAS: Rubric(
        id=RubricId.LV_VENTAS,
        label="LV Ventas",
        general=(
            _g("inicio_llamada", "Inicio de la Llamada (Saludo Corporativo)", 10),
            _g("gestion_comercial", "Gestión Comercial (Sondeo, Rebatimiento y Cierre)", 50),
            _g("reformulacion", "Reformulación (Recapitulación breve)", 10),
            _g("cierre_llamada", "Cierre de Llamada (Despedida Corporativa)", 10),
            _g("atencion_cliente", "Atención al Cliente (Fidelidad y Experiencia)", 20),
        ),
        high_impact=(
            _h(
                "fraude_comercial",
                "Fraude Comercial (manipular datos, pólizas falsas, prometer beneficios incorrectos)",
            ),
            _h(
                "gestion_venta",
                "Gestión de Venta (no recapitular prima, deducible, aseguradora o no confirmar activación)",
            ),
            _h("documentacion", "Documentación (no validar ni guiar envío de documentos solicitados)"),
            _h(
                "conducta_protocolo",
                "Conducta y Protocolo (maltrato, colgar sin despedida, incumplir horario)",
            ),
        ),
        holder_only_keys=frozenset({"gestion_comercial", "reformulacion", "cierre_llamada"}),
        closing_keys=frozenset({"gestion_comercial", "reformulacion", "cierre_llamada"}),
    ),
}


def get_rubric(rubric_id: RubricId | str) -> Rubric:
    """Look up a rubric by id. Unknown ids raise ConfigurationMissingError."""
    try:
        return CATALOG[RubricId(rubric_id)]
    except (ValueError, KeyError):
        raise ConfigurationMissingError(f"No rubric configured for '{rubric_id}'") from None


def validate_catalog() -> None:
    """Check the catalog is internally consistent. Raises on the first problem."""
    for rubric_id in RubricId:
        rubric = CATALOG.get(rubric_id)
        if rubric is None:
            raise ConfigurationMissingError(f"Rubric {rubric_id.value} missing from catalog")
        if rubric.total_weight != 100:
            raise ConfigurationMissingError(
                f"Rubric {rubric_id.value} weights sum to {rubric.total_weight}, expected 100"
            )
        general_keys = rubric.general_keys()
        if len(general_keys) != len(set(general_keys)):
            raise ConfigurationMissingError(f"Rubric {rubric_id.value} has duplicate general keys")
        hi_keys = rubric.high_impact_keys()
        if len(hi_keys) != len(set(hi_keys)):
            raise ConfigurationMissingError(
                f"Rubric {rubric_id.value} has duplicate high-impact keys"
            )
        unknown = (rubric.holder_only_keys | rubric.closing_keys) - set(general_keys)
        if unknown:
            raise ConfigurationMissingError(
                f"Rubric {rubric_id.value} override subsets reference unknown keys: {sorted(unknown)}"
            )
    for client_code, rubric_ids in CLIENT_RUBRICS.items():
        if not rubric_ids or any(r not in CATALOG for r in rubric_ids):
            raise ConfigurationMissingError(f"Client {client_code} has no rubric")


validate_catalog()
