"""
Schema definitions for visual schemes and user feedback.

Visual schemes are produced by the recommendation component, which lives
outside this package. Here they are only validated and compared, so the
models carry just the fields the preference learner and exporters read.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from scorevis.data.schema import CamelModel


# =============================================================================
# VALID OPTIONS
# =============================================================================

class ElementType(str, Enum):
    """Shape tag of a visual element."""
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    SQUARE = "square"
    TRIANGLE = "triangle"
    STAR = "star"
    WAVE = "wave"
    DIAMOND = "diamond"
    HEXAGON = "hexagon"
    PENTAGON = "pentagon"
    BAR = "bar"
    LINE = "line"
    RECT = "rect"
    ARROW_UP = "arrow-up"
    ARROW_DOWN = "arrow-down"
    LIGHTNING = "lightning"
    EXPLOSION = "explosion"
    CURVE = "curve"
    CUSTOM = "custom"


class AnimationKind(str, Enum):
    FLASH = "flash"
    ROTATE = "rotate"
    BOUNCE = "bounce"
    SCALE = "scale"
    SLIDE = "slide"
    PULSE = "pulse"
    SPIN = "spin"
    JUMP = "jump"
    SHAKE = "shake"
    FADE = "fade"
    NONE = "none"


class LayoutType(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    CIRCULAR = "circular"
    GRID = "grid"
    CUSTOM = "custom"
    CLUSTERED = "clustered"


# =============================================================================
# SCHEMES
# =============================================================================

class Position(CamelModel):
    x: float
    y: float


class Animation(CamelModel):
    type: AnimationKind = AnimationKind.NONE
    duration: int = Field(default=1000, ge=0, description="Milliseconds")
    easing: str = "ease-in-out"


class VisualElement(CamelModel):
    """One shape in a visual scheme."""

    id: str
    type: ElementType
    color: str = Field(..., description="HEX color", examples=["#FF6B6B"])
    size: float = Field(default=60, gt=0)
    position: Optional[Position] = None
    animation: Animation = Field(default_factory=Animation)


class VisualScheme(CamelModel):
    """A set of elements plus a layout, as recommended or as chosen by the user."""

    id: str
    elements: List[VisualElement] = Field(default_factory=list)
    layout: LayoutType
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)


# =============================================================================
# FEEDBACK
# =============================================================================

class UserAction(CamelModel):
    """
    What the user did with the recommendations for one structure.

    `reward` is filled in by the PreferenceLearner when the action is
    recorded; any value supplied by the caller is overwritten.

    Attributes:
        structure_id: Structure the schemes were recommended for
        recommended_schemes: Recommendations, best first
        selected_scheme: The scheme the user ended up with
        is_customized: False when the top recommendation was accepted as-is
    """

    structure_id: str
    recommended_schemes: List[VisualScheme] = Field(default_factory=list)
    selected_scheme: VisualScheme
    is_customized: bool = False
    reward: Optional[float] = None
    timestamp: datetime = Field(default_factory=datetime.now)


class PreferenceStatistics(CamelModel):
    total_actions: int = 0
    accepted_recommendations: int = 0
    modified_recommendations: int = 0
    rejected_recommendations: int = 0
    average_reward: float = 0.0
