"""Transient results of AI meal analysis."""

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class AIAnalysisResult:
    """Draft meal estimated by the AI backend.

    Values are kept exactly as the model produced them, so numeric fields may
    hold strings or floats. Run ``as_candidate()`` through ``validate_meal``
    before storing the draft as a meal.
    """

    name: object
    items: list[object] = field(default_factory=list)
    calories: object = None
    protein: object = None
    carbs: object = None
    fat: object = None
    portion: object = None

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "AIAnalysisResult":
        """Build a draft from a parsed model response."""
        items = payload.get("items")
        return cls(
            name=payload.get("name"),
            items=list(items) if isinstance(items, list) else [],
            calories=payload.get("calories"),
            protein=payload.get("protein"),
            carbs=payload.get("carbs"),
            fat=payload.get("fat"),
            portion=payload.get("portion"),
        )

    def with_macros(self, other: "AIAnalysisResult") -> "AIAnalysisResult":
        """Return a copy with numeric fields and portion taken from other."""
        return replace(
            self,
            calories=other.calories,
            protein=other.protein,
            carbs=other.carbs,
            fat=other.fat,
            portion=other.portion,
        )

    def as_candidate(self) -> dict[str, object]:
        """Return the draft as meal form input."""
        return {
            "name": self.name,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }
