"""
Symptom catalog

The labels offered on the check-in form, each with short harm-reduction
advice: what is happening, how to manage it, and when to seek help.
Check-ins may still carry free-text labels outside this list.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

# Glasses since the last check-in at which over-hydration becomes a concern
OVERHYDRATION_GLASSES = 4


class Symptom(str, Enum):
    JAW_CLENCHING = "Jaw clenching"
    EYE_WIGGLES = "Eye wiggles"
    INCREASED_ENERGY = "Increased energy"
    EUPHORIA = "Euphoria"
    ENHANCED_TOUCH = "Enhanced touch"
    SWEATING = "Sweating"
    THIRST = "Thirst"
    INCREASED_HEARTRATE = "Increased heartrate"
    ANXIETY = "Anxiety"
    ENHANCED_MUSIC = "Enhanced music"
    TALKATIVENESS = "Talkativeness"
    EMPATHY = "Empathy"
    BODY_WARMTH = "Body warmth"
    HEIGHTENED_SENSES = "Heightened senses"
    LOVE_FEELINGS = "Love feelings"
    LIGHT_SENSITIVITY = "Light sensitivity"
    BLURRY_VISION = "Blurry vision"
    DIZZINESS = "Dizziness"
    HEADACHE = "Headache"
    NAUSEA = "Nausea"
    COLD_EXTREMITIES = "Cold extremities"


@dataclass
class SymptomAdvice:
    label: str
    explanation: str
    management: List[str] = field(default_factory=list)
    warning_signs: str = ""
    known: bool = True

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "explanation": self.explanation,
            "management": list(self.management),
            "warning_signs": self.warning_signs,
            "known": self.known,
        }


_SEEK_HELP_GENERIC = (
    "Seek medical help for overheating, confusion, seizures, chest pain "
    "or fainting."
)

ADVICE: Dict[Symptom, SymptomAdvice] = {
    Symptom.JAW_CLENCHING: SymptomAdvice(
        label=Symptom.JAW_CLENCHING.value,
        explanation="Stimulation of the jaw muscles (bruxism); one of the most common side effects.",
        management=["Chew gum gently", "Massage the jaw muscles", "Apply a warm compress", "Check in and relax your jaw regularly"],
        warning_signs="Seek help if the jaw locks or pain persists for days.",
    ),
    Symptom.EYE_WIGGLES: SymptomAdvice(
        label=Symptom.EYE_WIGGLES.value,
        explanation="Involuntary eye movement (nystagmus); normal and temporary.",
        management=["Avoid detailed visual tasks", "Rest in a dim area", "Close your eyes periodically"],
        warning_signs="Seek help if it continues long after other effects have worn off.",
    ),
    Symptom.INCREASED_ENERGY: SymptomAdvice(
        label=Symptom.INCREASED_ENERGY.value,
        explanation="Stimulant effect from released neurotransmitters.",
        management=["Take regular breaks from dancing", "Stay somewhere cool", "Rest periodically"],
        warning_signs="Seek help for exhaustion with very high body temperature.",
    ),
    Symptom.EUPHORIA: SymptomAdvice(
        label=Symptom.EUPHORIA.value,
        explanation="Intense happiness driven by serotonin and dopamine release.",
        management=["Stay with trusted friends", "Remember the feeling is temporary"],
        warning_signs=_SEEK_HELP_GENERIC,
    ),
    Symptom.ENHANCED_TOUCH: SymptomAdvice(
        label=Symptom.ENHANCED_TOUCH.value,
        explanation="Heightened tactile sensitivity.",
        management=["Keep soft fabrics around", "Respect others' boundaries and consent"],
        warning_signs=_SEEK_HELP_GENERIC,
    ),
    Symptom.SWEATING: SymptomAdvice(
        label=Symptom.SWEATING.value,
        explanation="The body cooling itself while temperature regulation is disturbed.",
        management=["Wear light clothing", "Take breaks somewhere cooler", "Sip water, do not overhydrate"],
        warning_signs="Seek help immediately if sweating stops while you still feel hot.",
    ),
    Symptom.THIRST: SymptomAdvice(
        label=Symptom.THIRST.value,
        explanation="Fluid loss from sweating and activity, with impaired thirst signals.",
        management=["Drink no more than about one cup per hour", "Prefer electrolyte drinks", "Avoid alcohol"],
        warning_signs="Seek help for headache, nausea or confusion after drinking a lot of water.",
    ),
    Symptom.INCREASED_HEARTRATE: SymptomAdvice(
        label=Symptom.INCREASED_HEARTRATE.value,
        explanation="Sympathetic nervous system activation raises heart rate and blood pressure.",
        management=["Sit or lie down somewhere quiet", "Breathe slowly", "Avoid caffeine and other stimulants"],
        warning_signs="Seek help for chest pain, irregular heartbeat or fainting.",
    ),
    Symptom.ANXIETY: SymptomAdvice(
        label=Symptom.ANXIETY.value,
        explanation="Rapid neurotransmitter changes, most often during come-up or come-down.",
        management=["Breathe deeply", "Move away from stimulation", "Talk to a trusted friend", "Ground yourself with your senses"],
        warning_signs="Seek help for panic that does not ease or thoughts of self-harm.",
    ),
    Symptom.ENHANCED_MUSIC: SymptomAdvice(
        label=Symptom.ENHANCED_MUSIC.value,
        explanation="Increased emotional response to sound.",
        management=["Prepare a playlist beforehand", "Take listening breaks to hydrate"],
        warning_signs=_SEEK_HELP_GENERIC,
    ),
    Symptom.TALKATIVENESS: SymptomAdvice(
        label=Symptom.TALKATIVENESS.value,
        explanation="Reduced social anxiety and stronger urge to connect.",
        management=["Be mindful of oversharing", "Listen as well as talk"],
        warning_signs=_SEEK_HELP_GENERIC,
    ),
    Symptom.EMPATHY: SymptomAdvice(
        label=Symptom.EMPATHY.value,
        explanation="Heightened emotional connection linked to oxytocin release.",
        management=["Stay with people you trust", "Hold off on big decisions until later"],
        warning_signs=_SEEK_HELP_GENERIC,
    ),
    Symptom.BODY_WARMTH: SymptomAdvice(
        label=Symptom.BODY_WARMTH.value,
        explanation="Disturbed temperature regulation and increased skin blood flow.",
        management=["Dress in removable layers", "Cool your wrists and neck with water", "Avoid crowded spaces"],
        warning_signs="Seek help immediately for very high temperature, confusion or collapse.",
    ),
    Symptom.HEIGHTENED_SENSES: SymptomAdvice(
        label=Symptom.HEIGHTENED_SENSES.value,
        explanation="Stronger sensory processing; colours, sounds and textures feel more intense.",
        management=["Keep a calm space to retreat to", "Close your eyes if it becomes overwhelming"],
        warning_signs=_SEEK_HELP_GENERIC,
    ),
    Symptom.LOVE_FEELINGS: SymptomAdvice(
        label=Symptom.LOVE_FEELINGS.value,
        explanation="Bonding feelings from oxytocin and serotonin release.",
        management=["Remember the feelings are amplified", "Keep touch consensual"],
        warning_signs=_SEEK_HELP_GENERIC,
    ),
    Symptom.LIGHT_SENSITIVITY: SymptomAdvice(
        label=Symptom.LIGHT_SENSITIVITY.value,
        explanation="Dilated pupils let in more light.",
        management=["Wear sunglasses", "Avoid strobes", "Lower screen brightness"],
        warning_signs="Seek help for eye pain or vision loss.",
    ),
    Symptom.BLURRY_VISION: SymptomAdvice(
        label=Symptom.BLURRY_VISION.value,
        explanation="Pupil dilation and altered eye muscle coordination.",
        management=["Do not drive", "Rest your eyes", "Stay with friends when moving around"],
        warning_signs="Seek help if vision does not return to normal once effects wear off.",
    ),
    Symptom.DIZZINESS: SymptomAdvice(
        label=Symptom.DIZZINESS.value,
        explanation="Blood pressure changes or dehydration.",
        management=["Sit down", "Stand up slowly", "Sip an electrolyte drink"],
        warning_signs="Seek help for fainting or dizziness with chest pain.",
    ),
    Symptom.HEADACHE: SymptomAdvice(
        label=Symptom.HEADACHE.value,
        explanation="Dehydration, jaw tension or blood vessel changes, common during come-down.",
        management=["Rest somewhere dark and quiet", "Sip water slowly", "Relax the jaw and neck"],
        warning_signs="Seek help for a sudden severe headache, especially with confusion or vomiting.",
    ),
    Symptom.NAUSEA: SymptomAdvice(
        label=Symptom.NAUSEA.value,
        explanation="Serotonin acting on the gut and the brain's nausea centre.",
        management=["Sip water or ginger tea", "Get fresh air", "Eat something light afterwards"],
        warning_signs="Seek help for repeated vomiting or inability to keep fluids down.",
    ),
    Symptom.COLD_EXTREMITIES: SymptomAdvice(
        label=Symptom.COLD_EXTREMITIES.value,
        explanation="Blood vessels in the hands and feet constrict.",
        management=["Move around gently", "Warm hands and feet with layers"],
        warning_signs="Seek help if fingers or toes turn blue or go numb.",
    ),
}

GENERIC_ADVICE = SymptomAdvice(
    label="",
    explanation="A common effect. Intensity and duration vary between people.",
    management=["Stay with trusted friends", "Take breaks somewhere calm", "Sip water, do not overhydrate"],
    warning_signs=_SEEK_HELP_GENERIC,
    known=False,
)


def parse_symptom(label: str) -> Optional[Symptom]:
    """Catalog entry for a label, case-insensitive. None for free text."""
    normalized = (label or "").strip().lower()
    for symptom in Symptom:
        if symptom.value.lower() == normalized:
            return symptom
    return None


def catalog() -> List[str]:
    """Catalog labels in display order (alphabetical, as on the form)."""
    return sorted(symptom.value for symptom in Symptom)


def symptom_advice(label: str) -> SymptomAdvice:
    symptom = parse_symptom(label)
    if symptom is None:
        return SymptomAdvice(
            label=label,
            explanation=GENERIC_ADVICE.explanation,
            management=list(GENERIC_ADVICE.management),
            warning_signs=GENERIC_ADVICE.warning_signs,
            known=False,
        )
    return ADVICE[symptom]


def hydration_warning(glasses: int) -> Optional[str]:
    if glasses >= OVERHYDRATION_GLASSES:
        return "Remember not to overhydrate!"
    return None
