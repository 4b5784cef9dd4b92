"""Pydantic models for resolution requests and results."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wheel_matrix.catalog.schema import Artifact
from wheel_matrix.catalog.tags import to_dotted


class RequestDescriptor(BaseModel):
    """What the orchestrator wants installed, derived from the local runtime.

    ``accelerator_tag`` may be compact (``cu129``) or dotted (``12.9``);
    an unrecognised shape raises InvalidTag at construction.
    """

    model_config = ConfigDict(frozen=True)

    package_name: str
    framework_version: str
    accelerator_tag: str
    language_tag: str
    allow_abi_relaxation: bool = False
    variant_filter: str | None = None

    @field_validator("accelerator_tag")
    @classmethod
    def validate_accelerator_tag(cls, value: str) -> str:
        # InvalidTag is not a ValueError, so it propagates out of pydantic unwrapped
        to_dotted(value)
        return value.strip()

    @property
    def dotted_accelerator(self) -> str:
        return to_dotted(self.accelerator_tag)

    def describe(self) -> str:
        """Human-readable requested triple, e.g. 'flash-attn torch=2.8.0 cuda=12.9 python=3.13'."""
        text = (
            f"{self.package_name} torch={self.framework_version} "
            f"cuda={self.dotted_accelerator} python={self.language_tag}"
        )
        if self.variant_filter:
            text += f" variant={self.variant_filter}"
        return text


class MatchSuccess(BaseModel):
    """A resolved artifact and the fallback step that produced it."""

    model_config = ConfigDict(frozen=True)

    url: str
    artifact: Artifact
    tier_used: int
    tier_label: str
    score: int | None = None

    @property
    def ok(self) -> bool:
        return True


class MatchFailure(BaseModel):
    """Every permitted tier was tried and nothing matched."""

    model_config = ConfigDict(frozen=True)

    request: RequestDescriptor
    reason: str
    tiers_attempted: list[str] = Field(default_factory=list)
    abi_relaxation_tried: bool = False

    @property
    def ok(self) -> bool:
        return False

    def describe(self) -> str:
        tiers = "; ".join(self.tiers_attempted) or "none"
        return f"{self.reason} for {self.request.describe()} (tiers attempted: {tiers})"


MatchResult = MatchSuccess | MatchFailure
