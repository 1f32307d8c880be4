"""Override engine - transcript-driven adjustments applied before scoring.

Rules only move a criterion toward not-applicable (or, for an unintelligible
recording, toward satisfied); they never turn anything into a failure.
Detection is done by pluggable signals (transcript -> bool) so the wording
can change without touching the rules or the score calculator.

Rule order:
    1. unintelligible recording
    2. third-party answerer
    3. prematurely ended call
    4. no objection raised
    5. criteria unverifiable from audio
"""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from voxqa.schemas.judgment import CriterionJudgment, JudgmentSet
from voxqa.schemas.rubric import Rubric

logger = logging.getLogger(__name__)

Signal = Callable[[str], bool]

OBJECTION_KEY = "manejo_objeciones"
UNVERIFIABLE_KEYS = ("uso_herramientas", "tipificacion")

UNINTELLIGIBLE_NOTE = "N/A - unintelligible or defective recording, not attributable to the agent"
THIRD_PARTY_NOTE = "N/A - call answered by a third party, not the account holder"
DROPPED_CALL_NOTE = "N/A - call ended prematurely, the agent had no opportunity"
NO_OBJECTION_NOTE = "N/A - the customer raised no objection, nothing to handle"
UNVERIFIABLE_NOTE = "N/A - cannot be verified from the call audio"

THIRD_PARTY_PATTERNS = (
    r"no soy yo",
    r"es mi (hija|hijo|esposo|esposa|mamá|papá|madre|padre|hermano|hermana|señora|señor)",
    r"no vive conmigo",
    r"no (está|se encuentra)",
    r"ella no está|él no está",
    r"no es (el|la) titular",
    r"yo no soy",
    r"pero no soy",
    r"esa persona no",
    r"no la conozco|no lo conozco",
)

CUSTOMER_LEAVING_PATTERNS = (
    r"estoy (demasiado )?ocupad[ao]",
    r"no (puedo|tengo tiempo) (ahorita|ahora|en este momento)",
    r"me puedes? (llamar|marcar) (después|luego|más tarde|en una hora|en un rato|mañana)",
    r"llám[ae]me (después|luego|más tarde|mañana)",
    r"estoy (en el )?trabaj(o|ando)",
    r"estoy manejando",
    r"no es buen momento",
    r"no puedo hablar (ahorita|ahora|en este momento)",
    r"estoy en (una )?reuni[oó]n",
    r"llame.*más tarde|llámeme.*más tarde",
)

FAREWELL_PATTERN = re.compile(
    r"gracias|hasta luego|chao|adiós|bye|que (le |te )?vaya bien|fue un placer|con mucho gusto"
)

OBJECTION_PATTERNS = (
    r"no me interesa",
    r"no quiero",
    r"ya tengo",
    r"está muy caro|es muy caro|sale muy caro",
    r"no tengo (plata|dinero|presupuesto)",
    r"no puedo pagar",
    r"ya lo tengo|ya tengo uno",
    r"no necesito",
    r"no gracias",
    r"déjeme pensar|déjame pensar",
    r"lo consulto (con|a)",
    r"no estoy interesad[ao]",
    r"no me llame|no me vuelva a llamar",
    r"retire.*de.*base|no llame.*más",
)


def pattern_signal(patterns: Iterable[str]) -> Signal:
    """Build a signal that fires when any pattern matches the lowercased transcript."""
    compiled = [re.compile(p) for p in patterns]

    def signal(transcript: str) -> bool:
        text = (transcript or "").lower()
        return any(p.search(text) for p in compiled)

    return signal


_customer_leaving = pattern_signal(CUSTOMER_LEAVING_PATTERNS)


def dropped_call_signal(transcript: str) -> bool:
    """True when the customer cut the call short or it ended without a farewell.

    Two triggers: the customer says they cannot talk now, or the recording
    stops on an agent line with no farewell in the last five lines. Either is
    cancelled when the customer's last line is itself a farewell.
    """
    lines = [line for line in (transcript or "").split("\n") if line.strip()]

    wanted_to_leave = _customer_leaving(transcript)

    tail = " ".join(lines[-5:]).lower()
    last_line = lines[-1] if lines else ""
    ended_abruptly = (
        not FAREWELL_PATTERN.search(tail)
        and re.match(r"^agente:", last_line.strip(), re.IGNORECASE) is not None
        and len(lines) >= 3
    )

    if not wanted_to_leave and not ended_abruptly:
        return False

    customer_lines = [line for line in lines if re.match(r"^cliente:", line.strip(), re.IGNORECASE)]
    if customer_lines and FAREWELL_PATTERN.search(customer_lines[-1].lower()):
        return False
    return True


@dataclass(frozen=True)
class OverrideSignals:
    """Transcript detectors used by the rules."""

    third_party: Signal = field(default_factory=lambda: pattern_signal(THIRD_PARTY_PATTERNS))
    dropped_call: Signal = dropped_call_signal
    objection: Signal = field(default_factory=lambda: pattern_signal(OBJECTION_PATTERNS))


DEFAULT_SIGNALS = OverrideSignals()


@dataclass
class OverrideOutcome:
    """Adjusted judgments and the names of the rules that changed something."""

    judgments: JudgmentSet
    applied: list[str] = field(default_factory=list)


def _force_na(judgment: CriterionJudgment, note: str) -> CriterionJudgment:
    return judgment.model_copy(update={"not_applicable": True, "rationale": note})


def _unintelligible(rubric: Rubric, judgments: JudgmentSet) -> JudgmentSet:
    general = [
        CriterionJudgment(
            key=c.key, satisfied=False, not_applicable=True,
            rationale=UNINTELLIGIBLE_NOTE, quote="", timestamp_seconds=0,
        )
        for c in rubric.general
    ]
    high_impact = [
        CriterionJudgment(
            key=c.key, satisfied=True, rationale=UNINTELLIGIBLE_NOTE,
            quote="", timestamp_seconds=0,
        )
        for c in rubric.high_impact
    ]
    return judgments.model_copy(update={"general": general, "high_impact": high_impact})


def _third_party(rubric: Rubric, general: list[CriterionJudgment]) -> bool:
    changed = False
    for i, j in enumerate(general):
        if j.key in rubric.holder_only_keys and not j.not_applicable:
            general[i] = _force_na(j, THIRD_PARTY_NOTE)
            changed = True
    return changed


def _dropped_call(rubric: Rubric, general: list[CriterionJudgment]) -> bool:
    # Criteria the agent already satisfied before the cutoff keep their credit.
    changed = False
    for i, j in enumerate(general):
        if j.key in rubric.closing_keys and not j.not_applicable and not j.satisfied:
            general[i] = _force_na(j, DROPPED_CALL_NOTE)
            changed = True
    return changed


def _no_objection(general: list[CriterionJudgment], had_objection: Callable[[], bool]) -> bool:
    for i, j in enumerate(general):
        if j.key != OBJECTION_KEY or j.not_applicable or j.satisfied:
            continue
        if had_objection():
            return False
        general[i] = _force_na(j, NO_OBJECTION_NOTE)
        return True
    return False


def _unverifiable(general: list[CriterionJudgment]) -> bool:
    changed = False
    for i, j in enumerate(general):
        if j.key in UNVERIFIABLE_KEYS and not j.not_applicable and not j.satisfied:
            general[i] = _force_na(j, UNVERIFIABLE_NOTE)
            changed = True
    return changed


def apply_overrides(
    rubric: Rubric,
    judgments: JudgmentSet,
    transcript: str | None = None,
    unintelligible: bool | None = None,
    signals: OverrideSignals = DEFAULT_SIGNALS,
) -> OverrideOutcome:
    """Apply the override rules in order and return a new judgment set.

    transcript and unintelligible default to the values carried by the
    judgment set. The input is never mutated.
    """
    text = judgments.transcript if transcript is None else transcript
    flagged = judgments.unintelligible if unintelligible is None else unintelligible

    if flagged:
        logger.info("Unintelligible recording for %s, forcing maximum score", rubric.id.value)
        adjusted = _unintelligible(rubric, judgments)
        return OverrideOutcome(
            judgments=adjusted.model_copy(update={"unintelligible": True}),
            applied=["unintelligible"],
        )

    general = list(judgments.general)
    applied: list[str] = []

    if signals.third_party(text) and _third_party(rubric, general):
        logger.info("Third-party answerer detected for %s", rubric.id.value)
        applied.append("third_party")

    if signals.dropped_call(text) and _dropped_call(rubric, general):
        logger.info("Prematurely ended call detected for %s", rubric.id.value)
        applied.append("dropped_call")

    if _no_objection(general, lambda: signals.objection(text)):
        logger.info("No customer objection found for %s", rubric.id.value)
        applied.append("no_objection")

    if _unverifiable(general):
        applied.append("unverifiable")

    return OverrideOutcome(
        judgments=judgments.model_copy(update={"general": general}),
        applied=applied,
    )
