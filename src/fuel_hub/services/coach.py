"""AI coaching service: meal analysis, recipes, groceries, workouts, research."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from fuel_hub.domain.coach import (
    CoachReply,
    MealAnalysis,
    ResearchResult,
    WorkoutPlan,
)
from fuel_hub.domain.profile import AthleteProfile
from fuel_hub.services.parsers import MacroParseError, parse_macros, parse_workout

_logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are Bacon Dao, a world-class performance nutrition and S&C coach. "
    "You provide direct, professional, and science-backed advice for elite "
    "athletes. Format responses in clean Markdown. NEVER use nested header-bold "
    "markers like '##**' or '###**'. Use '###' for clear section headers. Use "
    "bold text only for specific emphasis or labels."
)

MACROS_FORMAT = (
    "CRITICAL: You MUST include a \"### Macros\" section at the very end.\n"
    "Format the macros EXACTLY as follows (single integer numbers, no ranges):\n"
    "- Protein: [number]g\n"
    "- Carbs: [number]g\n"
    "- Fats: [number]g\n"
    "- Calories: [number] kcal"
)

WORKOUT_FORMAT = """STRUCTURE REQUIREMENTS FOR EACH TRAINING DAY:
1. ENCAPSULATION: Wrap the entire day's content between "---DAY_START---" and \
"---DAY_END---".
2. TITLE: Use "### Day [X]: [Focus Area Title]".
3. WARM-UP: Include a mandatory "### Movement Preparation & Warm-up" section \
(approx. 8-12 minutes).
4. GROUPING: Group primary exercises by movement category or muscle group \
(e.g., "### Explosive Power", "### Primary Lower Body Strength").
5. EXERCISE FORMAT: Each exercise MUST follow this EXACT pattern (the pipe \
symbols are mandatory):
   - **[Exercise Name]** | [Sets] x [Reps] | **Rest: [Time]** | RPE: [Number] \
[ALT_START] Alt: [Alternative Movement Suggestion] [ALT_END]
6. COOL-DOWN: Include a mandatory "### Recovery & Joint Health" section \
(approx. 5-10 minutes).

STRUCTURE REQUIREMENTS FOR REST/RECOVERY DAYS:
1. Use "### Day [X]: Rest & Active Recovery".
2. Include "### Active Recovery Strategy" (e.g. mobility flow, swimming, light walk).
3. Include "### Mental Recovery Strategy" (e.g. CNS down-regulation, breathwork).

CRITICAL:
- Ensure 'Rest: [Time]' is always clearly visible and bolded.
- Every main exercise MUST have an alternative in the [ALT_START]...[ALT_END] block.
- Use '###' for all sub-headers. No nested markdown like '##**'.
- Be direct, high-performance focused, and professional."""


class CoachError(RuntimeError):
    """Raised when the AI coach cannot produce a usable response."""


class CoachClient(Protocol):
    """Interface for the generative AI backend."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        instructions: str,
        prompt: str,
        temperature: float | None,
        image_data_url: str | None = None,
        web_search: bool = False,
    ) -> CoachReply:
        """Return generated text and any cited sources."""


@dataclass
class CoachService:
    """Builds coaching prompts and interprets the replies."""

    client: CoachClient
    model: str
    workout_model: str
    temperature: float | None = 0.7

    async def ask(self, question: str) -> str:
        """Answer a free-form coaching question."""
        reply = await self._generate(question)
        return reply.text

    async def analyze_meal_text(self, description: str, goal: str) -> MealAnalysis:
        """Estimate macros for a described meal."""
        prompt = (
            f'Estimate macros for this meal description: "{description}". '
            f"Goal: {goal}.\n"
            "If you need more info (e.g. was it fried or grilled?), ask a brief "
            "clarifying question at the start.\n"
            f"{MACROS_FORMAT}"
        )
        reply = await self._generate(prompt)
        return _to_meal_analysis(reply.text)

    async def analyze_meal_image(
        self, image_bytes: bytes, description: str, goal: str
    ) -> MealAnalysis:
        """Identify foods in a meal photo and estimate macros."""
        prompt = (
            f"Analyze this meal for a college athlete (Goal: {goal}).\n"
            f'User Description: "{description}".\n'
            "Identify foods and estimate macros precisely.\n"
            "If unsure about portion sizes or preparation, ask the user a "
            "clarifying question to refine your estimate.\n"
            f"{MACROS_FORMAT}"
        )
        reply = await self._generate(prompt, image_data_url=_to_data_url(image_bytes))
        return _to_meal_analysis(reply.text)

    async def refine_analysis(
        self, previous: str, follow_up: str, goal: str
    ) -> MealAnalysis:
        """Recalculate a meal analysis with the athlete's follow-up details."""
        prompt = (
            f'Previous Analysis: "{previous}".\n'
            f'Athlete Follow-up: "{follow_up}".\n'
            f"Re-calculate macros for a {goal} goal.\n"
            f"{MACROS_FORMAT}"
        )
        reply = await self._generate(prompt)
        return _to_meal_analysis(reply.text)

    async def build_recipe(self, ingredients: str, goal: str) -> str:
        """Suggest a quick recipe from the ingredients on hand."""
        reply = await self._generate(
            f"I have: {ingredients}. Goal: {goal}. Give me one quick, elite "
            "performance recipe with clear steps."
        )
        return reply.text

    async def generate_grocery_plan(  # noqa: PLR0913
        self,
        profile: AthleteProfile,
        budget: str,
        location: str,
        favorite_foods: str = "",
        preferences: str = "",
    ) -> ResearchResult:
        """Plan a weekly grocery haul grounded in local store data."""
        prompt = (
            f"Weekly grocery plan for a {profile.sport} athlete. Budget: ${budget}. "
            f"Location: {location}.\n"
            f"Athlete Likes: {profile.likes or 'none given'}. "
            f"Dislikes: {profile.dislikes or 'none given'}.\n"
            f"User Inputs: Favs: {favorite_foods}. Prefs: {preferences}. "
            f"Kitchen access: {'yes' if profile.has_kitchen else 'no'}. "
            "Use ### for headers."
        )
        reply = await self._generate(prompt, web_search=True)
        return ResearchResult(text=reply.text, sources=reply.sources)

    async def generate_workout(
        self, profile: AthleteProfile, days: int, focus: str
    ) -> WorkoutPlan:
        """Generate a structured multi-day training split."""
        prompt = (
            f"Create a high-performance {days}-day athletic training split for a "
            f"{profile.sport} {profile.position}.\n"
            f"Goal: {profile.goal}. Current Season: {profile.season}. "
            f"Protocol Focus: {focus}.\n\n"
            f"{WORKOUT_FORMAT}"
        )
        reply = await self._generate(prompt, model=self.workout_model)
        return parse_workout(reply.text)

    async def research(self, query: str) -> ResearchResult:
        """Research a performance topic with web citations."""
        reply = await self._generate(
            f"Research performance topic: {query}.", web_search=True
        )
        return ResearchResult(text=reply.text, sources=reply.sources)

    async def _generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        image_data_url: str | None = None,
        web_search: bool = False,
    ) -> CoachReply:
        try:
            reply = await self.client.generate(
                model=model or self.model,
                instructions=SYSTEM_INSTRUCTION,
                prompt=prompt,
                temperature=self.temperature,
                image_data_url=image_data_url,
                web_search=web_search,
            )
        except Exception as exc:
            _logger.warning("AI coach request failed: %s", exc)
            raise CoachError(f"AI_ERROR: {exc}") from exc
        if not reply.text.strip():
            raise CoachError("Empty response from AI engine.")
        return reply


def _to_meal_analysis(text: str) -> MealAnalysis:
    """Attach parsed macros, or a warning when they cannot be read."""
    try:
        return MealAnalysis(text=text, macros=parse_macros(text))
    except MacroParseError as exc:
        _logger.info("Meal analysis without parsable macros: %s", exc)
        return MealAnalysis(text=text, warning=str(exc))


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
