"""
Sacrament preparation checklists (baptism, confirmation, first communion).

Trackers are stateless: the completed step ids travel in the query string
(``?done=registration&done=godparents``), so a checklist can be bookmarked and
no visitor data is stored on the server.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable
from urllib.parse import urlencode


class UnknownTrackerError(LookupError):
    pass


@dataclass(frozen=True)
class PreparationStep:
    id: str
    title: str
    description: str
    category: str
    estimated_time: str = ""
    resources: tuple[str, ...] = ()
    next_action: str = ""
    optional: bool = False


def _step(id, title, description, category, estimated_time, resources, next_action, optional=False):
    return PreparationStep(id, title, description, category, estimated_time, tuple(resources), next_action, optional)


BAPTISM_INFANT = (
    _step("registration", "Parish Registration", "Both parents must be registered parishioners of St Saviour's",
          "preparation", "1 week", ["Parish registration form", "Proof of address"],
          "Contact parish office to register"),
    _step("preparation-course", "Baptism Preparation Course",
          "Attend the mandatory baptism preparation session for parents", "preparation", "2 hours",
          ["Course materials provided", "Note-taking materials"], "Book preparation session"),
    _step("birth-certificate", "Birth Certificate", "Provide original birth certificate of the child to be baptised",
          "documentation", "1 day", ["Original birth certificate"], "Obtain from registry office if needed"),
    _step("godparents", "Choose Godparents", "Select Catholic godparents who meet Church requirements",
          "spiritual", "1 week", ["Godparent requirements checklist", "Confirmation certificates"],
          "Discuss with potential godparents"),
    _step("baptism-outfit", "Baptism Outfit", "Prepare white garment and other ceremonial items", "ceremony",
          "1 week", ["White clothing or christening gown", "Candle (provided)"], "Purchase or prepare outfit",
          optional=True),
    _step("schedule-baptism", "Schedule Baptism", "Book the baptism date with the parish office", "preparation",
          "30 minutes", ["Calendar availability", "Preferred dates list"], "Contact parish office to schedule"),
)

BAPTISM_ADULT = (
    _step("rcia-enrollment", "RCIA Enrollment", "Enroll in the Rite of Christian Initiation of Adults program",
          "preparation", "1 week", ["RCIA application form", "Personal commitment"], "Contact RCIA coordinator"),
    _step("weekly-sessions", "Weekly RCIA Sessions", "Attend weekly formation sessions for 6-12 months",
          "preparation", "6-12 months", ["RCIA materials", "Catholic Bible", "Notebook"],
          "Begin attending weekly sessions"),
    _step("sponsor-selection", "Choose a Sponsor", "Select a Catholic sponsor to guide your faith journey",
          "spiritual", "2 weeks", ["Sponsor requirements", "Sponsor commitment form"],
          "Find and ask a suitable sponsor"),
    _step("scrutinies", "Lenten Scrutinies", "Participate in the three scrutinies during Lent", "spiritual",
          "3 weeks", ["Prayer preparation", "Spiritual reflection"], "Prepare spiritually for scrutinies"),
    _step("retreat", "Pre-Baptism Retreat", "Attend the preparatory retreat before Easter Vigil", "spiritual",
          "1 day", ["Retreat materials", "Journal"], "Register for retreat", optional=True),
    _step("easter-vigil", "Easter Vigil Ceremony", "Receive baptism during the Easter Vigil celebration",
          "ceremony", "3 hours", ["White garment", "Candle (provided)", "Family invitation"],
          "Prepare for Easter Vigil"),
)

CONFIRMATION_YOUTH = (
    _step("eligibility", "Eligibility Check", "Must be in Year 9 or above and baptised Catholic", "preparation",
          "1 day", ["Baptism certificate", "School year confirmation"], "Verify baptism status with parish office"),
    _step("enrollment", "Program Enrollment", "Register for the 2-year confirmation preparation program",
          "preparation", "1 week", ["Registration form", "Medical forms", "Emergency contacts"],
          "Complete online registration form"),
    _step("weekly-classes", "Weekly Classes", "Attend weekly Sunday morning sessions covering Catholic faith",
          "preparation", "2 years", ["Faith formation materials", "Bible", "Notebook"],
          "Begin attending Sunday 10:00 AM sessions"),
    _step("service-hours", "Service Hours", "Complete 30 hours of community service reflecting Catholic values",
          "community", "18 months", ["Service log book", "Supervisor contacts", "Project ideas"],
          "Choose service project and begin logging hours"),
    _step("sponsor-selection", "Choose Confirmation Sponsor", "Select a confirmed Catholic to guide your faith journey",
          "spiritual", "2 weeks", ["Sponsor requirements sheet", "Sponsor forms", "Meeting guidelines"],
          "Identify potential sponsor and discuss commitment"),
    _step("saint-name", "Choose Confirmation Name", "Research and select a saint name for confirmation",
          "spiritual", "3 weeks", ["Saints reference book", "Online saint database", "Reflection worksheet"],
          "Research saints and choose meaningful name"),
    _step("retreat", "Confirmation Retreat", "Attend mandatory weekend retreat for spiritual preparation",
          "spiritual", "1 weekend", ["Retreat materials", "Personal items", "Journal"],
          "Register for scheduled retreat weekend"),
    _step("interview", "Final Interview", "Meet with priest for final assessment and blessing", "ceremony",
          "30 minutes", ["Preparation summary", "Questions about faith", "Sponsor presence"],
          "Schedule interview appointment"),
    _step("ceremony-prep", "Ceremony Preparation", "Final preparations for confirmation ceremony", "ceremony",
          "1 week", ["Appropriate clothing", "Family invitations", "Photography arrangements"],
          "Prepare ceremony details with family"),
)

CONFIRMATION_ADULT = (
    _step("rcia-inquiry", "RCIA Inquiry", "Begin inquiry period to explore Catholic faith and confirmation",
          "preparation", "2 months", ["RCIA handbook", "Question journal", "Prayer guide"],
          "Contact RCIA coordinator to begin"),
    _step("formation-sessions", "Formation Sessions", "Attend weekly Wednesday evening RCIA sessions",
          "preparation", "6-8 months", ["Catholic Bible", "Catechism", "Formation workbook"],
          "Begin regular Wednesday 7:00 PM attendance"),
    _step("sponsor-selection", "Sponsor Selection", "Choose a confirmed Catholic to guide your journey",
          "spiritual", "1 month", ["Sponsor guidelines", "Commitment forms", "Meeting schedule"],
          "Find and ask suitable sponsor"),
    _step("rite-of-welcome", "Rite of Welcome", "Participate in liturgical rite welcoming candidates",
          "spiritual", "1 hour", ["Ceremonial preparation", "Family invitation", "Understanding of rite"],
          "Prepare for welcome ceremony"),
    _step("sending-forth", "Rite of Sending Forth", "Parish ceremony before diocesan rite of election",
          "spiritual", "1 hour", ["Parish testimonial", "Sponsor support", "Prayer preparation"],
          "Prepare for sending forth rite"),
    _step("retreat", "Confirmation Retreat", "Day of reflection and spiritual preparation", "spiritual",
          "1 day", ["Retreat materials", "Journal", "Prayer intentions"], "Register for retreat day",
          optional=True),
    _step("easter-vigil", "Easter Vigil Ceremony", "Receive confirmation during Easter Vigil celebration",
          "ceremony", "3 hours", ["Appropriate clothing", "Candle", "Family coordination"],
          "Prepare for Easter Vigil"),
)

COMMUNION_CHILD = (
    _step("baptism-verified", "Baptism Verification", "Confirm Catholic baptism and provide baptismal certificate",
          "documentation", "1 week", ["Baptismal certificate", "Parish records verification"],
          "Contact parish office with baptismal details"),
    _step("age-readiness", "Age of Reason", "Child must have reached the age of reason (typically 7-8 years)",
          "preparation", "1 day", ["School records", "Parent assessment"],
          "Confirm child understands basic faith concepts"),
    _step("program-enrollment", "First Communion Program", "Enroll in the 2-year First Communion preparation program",
          "preparation", "1 week", ["Registration forms", "Medical information", "Emergency contacts"],
          "Complete enrollment paperwork"),
    _step("weekly-classes", "Weekly Religion Classes", "Attend weekly catechesis sessions for 2 years",
          "preparation", "2 years",
          ["Faith formation books", "Catholic Bible for children", "Activity workbooks"],
          "Begin attending Sunday classes at 9:00 AM"),
    _step("mass-understanding", "Understanding the Mass", "Learn about the parts of Mass and the Real Presence",
          "spiritual", "6 months", ["Mass booklet for children", "Real Presence explanations", "Visual aids"],
          "Study Mass parts and practice responses"),
    _step("first-confession", "First Confession", "Receive the sacrament of Reconciliation before First Communion",
          "spiritual", "30 minutes",
          ["Examination of conscience for children", "Confession guide", "Prayer cards"],
          "Schedule and attend First Confession"),
    _step("retreat-day", "First Communion Retreat", "Attend special retreat day for spiritual preparation",
          "spiritual", "1 day", ["Retreat materials", "Lunch and drinks", "Comfortable clothes"],
          "Register for retreat day"),
    _step("practice-session", "Ceremony Rehearsal", "Attend rehearsal to practice receiving Holy Communion",
          "practice", "1 hour", ["Church attendance", "Parent presence", "Comfortable shoes"],
          "Attend scheduled rehearsal"),
    _step("communion-outfit", "First Communion Outfit", "Prepare appropriate white clothing for the ceremony",
          "ceremony", "2 weeks", ["White dress or suit", "Appropriate shoes", "Optional veil or tie"],
          "Select and prepare ceremonial clothing", optional=True),
    _step("family-preparation", "Family Spiritual Preparation",
          "Family prayer and spiritual preparation leading up to the day", "spiritual", "1 week",
          ["Family prayer time", "Special intentions", "Gratitude prayers"],
          "Begin daily family prayer for intention"),
)

COMMUNION_ADULT = (
    _step("rcia-completion", "RCIA Completion", "Complete the Rite of Christian Initiation of Adults program",
          "preparation", "6-12 months", ["RCIA materials", "Catholic Bible", "Catechism"], "Enroll in RCIA program"),
    _step("baptism-confirmation", "Baptism and Confirmation", "Receive baptism and confirmation if not already received",
          "spiritual", "1 ceremony", ["Sponsor support", "White garment", "Candle"],
          "Prepare for Easter Vigil reception"),
    _step("sponsor-selection", "Sponsor Selection", "Choose a Catholic sponsor to guide your journey", "spiritual",
          "2 weeks", ["Sponsor guidelines", "Commitment forms", "Regular meetings"],
          "Identify and ask suitable sponsor"),
    _step("eucharistic-formation", "Eucharistic Formation", "Study the theology and practice of the Eucharist",
          "preparation", "3 months", ["Eucharistic theology books", "Mass attendance", "Adoration"],
          "Begin intensive Eucharistic study"),
    _step("spiritual-direction", "Spiritual Direction", "Meet regularly with spiritual director for guidance",
          "spiritual", "6 months", ["Monthly meetings", "Prayer journal", "Spiritual reading"],
          "Arrange spiritual direction meetings", optional=True),
    _step("final-preparation", "Final Preparation", "Immediate preparation including fasting and prayer",
          "spiritual", "1 week", ["Eucharistic fast", "Special prayers", "Confession"],
          "Begin final week of intensive preparation"),
)

CATALOGS: dict[str, dict[str, tuple[PreparationStep, ...]]] = {
    "baptism": {"infant": BAPTISM_INFANT, "adult": BAPTISM_ADULT},
    "confirmation": {"youth": CONFIRMATION_YOUTH, "adult": CONFIRMATION_ADULT},
    "communion": {"child": COMMUNION_CHILD, "adult": COMMUNION_ADULT},
}

TITLES = {
    "baptism": "Baptism Preparation",
    "confirmation": "Confirmation Preparation",
    "communion": "First Communion Preparation",
}

PHASE_INITIAL = "initial"
PHASE_PREPARATION = "preparation"
PHASE_READY = "ready"


@dataclass
class PreparationTracker:
    sacrament: str
    variant: str
    completed: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.completed = {step_id for step_id in self.completed if step_id in self.step_ids}

    @property
    def steps(self) -> tuple[PreparationStep, ...]:
        return CATALOGS[self.sacrament][self.variant]

    @property
    def step_ids(self) -> list[str]:
        return [step.id for step in self.steps]

    @property
    def title(self) -> str:
        return TITLES[self.sacrament]

    def is_done(self, step_id: str) -> bool:
        return step_id in self.completed

    def toggle(self, step_id: str) -> None:
        if step_id not in self.step_ids:
            return
        if step_id in self.completed:
            self.completed.discard(step_id)
        else:
            self.completed.add(step_id)

    @property
    def required_total(self) -> int:
        return sum(1 for step in self.steps if not step.optional)

    @property
    def required_done(self) -> int:
        return sum(1 for step in self.steps if not step.optional and step.id in self.completed)

    @property
    def progress(self) -> int:
        """Percentage of required steps completed; optional steps never count."""
        if not self.required_total:
            return 100
        value = round(self.required_done / self.required_total * 100)
        return max(0, min(100, value))

    @property
    def phase(self) -> str:
        if self.progress >= 100:
            return PHASE_READY
        if self.progress > 0:
            return PHASE_PREPARATION
        return PHASE_INITIAL

    @property
    def phase_message(self) -> str:
        phase = self.phase
        if phase == PHASE_PREPARATION:
            return "Your preparation is underway - keep going!"
        if self.sacrament == "communion":
            child = self.variant == "child"
            if phase == PHASE_INITIAL:
                whose = "child's " if child else ""
                return f"Ready to begin your {whose}First Communion preparation journey"
            return f"Congratulations! {'Your child is' if child else 'You are'} ready for First Holy Communion"
        if phase == PHASE_INITIAL:
            return f"Ready to begin your {self.sacrament} preparation journey"
        return f"Congratulations! You're ready for {self.sacrament}"

    def query_for(self, step_id: str) -> str:
        """Query string describing the checklist after toggling ``step_id``."""
        done = set(self.completed)
        if step_id in done:
            done.discard(step_id)
        elif step_id in self.step_ids:
            done.add(step_id)
        ordered = [sid for sid in self.step_ids if sid in done]
        return urlencode({"variant": self.variant, "done": ordered}, doseq=True)

    def as_dict(self) -> dict:
        return {
            "sacrament": self.sacrament,
            "variant": self.variant,
            "title": self.title,
            "progress": self.progress,
            "phase": self.phase,
            "phaseMessage": self.phase_message,
            "requiredTotal": self.required_total,
            "requiredDone": self.required_done,
            "steps": [
                {
                    "id": step.id,
                    "title": step.title,
                    "description": step.description,
                    "category": step.category,
                    "optional": step.optional,
                    "estimatedTime": step.estimated_time,
                    "resources": list(step.resources),
                    "nextAction": step.next_action,
                    "completed": step.id in self.completed,
                }
                for step in self.steps
            ],
        }


def variants_for(sacrament: str) -> list[str]:
    if sacrament not in CATALOGS:
        raise UnknownTrackerError(sacrament)
    return list(CATALOGS[sacrament])


def get_tracker(sacrament: str, variant: str | None = None, completed: Iterable[str] = ()) -> PreparationTracker:
    """Build a tracker; ``variant`` defaults to the first one for the sacrament."""
    variants = variants_for(sacrament)
    variant = variant or variants[0]
    if variant not in variants:
        raise UnknownTrackerError(f"{sacrament}/{variant}")
    return PreparationTracker(sacrament, variant, set(completed))
