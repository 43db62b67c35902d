"""Domain models for biometric profiles and nutrition targets."""

from dataclasses import dataclass
from enum import StrEnum


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "veryActive"


class Goal(StrEnum):
    """Weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class Profile:
    """Biometric form data as entered by the user.

    Numeric fields keep their raw form values; they are validated when targets
    are computed.
    """

    age: str
    gender: str
    height: str
    weight: str
    activity_level: str
    goal: str

    def to_dict(self) -> dict[str, str]:
        """Serialize using the stored field names."""
        return {
            "age": self.age,
            "gender": self.gender,
            "height": self.height,
            "weight": self.weight,
            "activityLevel": self.activity_level,
            "goal": self.goal,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "Profile":
        """Build a profile from a stored document."""
        return cls(
            age=str(data.get("age", "")),
            gender=str(data.get("gender", "")),
            height=str(data.get("height", "")),
            weight=str(data.get("weight", "")),
            activity_level=str(
                data.get("activityLevel", data.get("activity_level", ""))
            ),
            goal=str(data.get("goal", "")),
        )


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein: int
    carbs: int
    fats: int


@dataclass(frozen=True)
class Targets:
    """Derived daily targets for a profile."""

    bmi: float
    bmr: float
    tdee: float
    daily_calories: float
    macros: MacroTargets

    def to_dict(self) -> dict[str, object]:
        """Serialize using the stored field names."""
        return {
            "bmi": self.bmi,
            "bmr": self.bmr,
            "tdee": self.tdee,
            "dailyCalories": self.daily_calories,
            "macros": {
                "protein": self.macros.protein,
                "carbs": self.macros.carbs,
                "fats": self.macros.fats,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "Targets":
        """Build targets from a stored document."""
        macros = data.get("macros") or {}
        return cls(
            bmi=float(data["bmi"]),
            bmr=float(data["bmr"]),
            tdee=float(data["tdee"]),
            daily_calories=float(data["dailyCalories"]),
            macros=MacroTargets(
                protein=int(macros.get("protein", 0)),
                carbs=int(macros.get("carbs", 0)),
                fats=int(macros.get("fats", 0)),
            ),
        )


@dataclass(frozen=True)
class StoredProfile:
    """Profile and targets as persisted for a user."""

    profile: Profile
    targets: Targets | None
