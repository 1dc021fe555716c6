from dataclasses import dataclass, field
from typing import List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from novelai_image.core.encoding import to_data_url
from novelai_image.domain.enums import NoiseSchedule, NovelAIModel, NovelAISampler, UCPreset

# --- Request payload (wire format) ---
# Mixed casing below is intentional: it matches the service's schema.


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Caption(_Frozen):
    base_caption: str
    char_captions: Tuple[str, ...] = ()


class V4ConditionInput(_Frozen):
    caption: Caption
    # Constants of the current protocol version
    use_coords: bool = False
    use_order: bool = True
    legacy_uc: bool = False


class GenerationParameters(_Frozen):
    width: int
    height: int
    scale: float
    sampler: NovelAISampler
    steps: int
    n_samples: int
    seed: int
    negative_prompt: str

    v4_prompt: V4ConditionInput
    v4_negative_prompt: V4ConditionInput

    qualityToggle: bool
    ucPreset: UCPreset

    params_version: Literal[3] = 3
    noise_schedule: NoiseSchedule
    sm: bool
    sm_dyn: bool
    dynamic_thresholding: bool
    # Keep the historical sampler behaviour the service expects
    prefer_brownian: Literal[True] = True
    deliberate_euler_ancestral_bug: Literal[True] = True
    legacy: Literal[False] = False
    legacy_v3_extend: Literal[False] = False


class GenerateImagePayload(_Frozen):
    input: str
    model: NovelAIModel
    action: Literal["generate"] = "generate"
    parameters: GenerationParameters


# --- Results ---


class ImageMetadata(_Frozen):
    """Echo of the submitted request. Never parsed from the response."""

    seed: Optional[int] = None
    prompt: Optional[str] = None
    model: Optional[str] = None
    sampler: Optional[str] = None
    steps: Optional[int] = None
    scale: Optional[float] = None

    @classmethod
    def from_payload(cls, payload: GenerateImagePayload) -> "ImageMetadata":
        params = payload.parameters
        return cls(
            seed=params.seed,
            prompt=payload.input,
            model=payload.model.value,
            sampler=params.sampler.value,
            steps=params.steps,
            scale=params.scale,
        )


class ImageResult(BaseModel):
    images: List[bytes] = Field(default_factory=list)
    metadata: Optional[ImageMetadata] = None

    def to_data_urls(self, mime_type: str = "image/png") -> List[str]:
        return [to_data_url(image, mime_type) for image in self.images]


# --- Collaborator value types ---


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    content: bytes = b""
    reason: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)  # lower-cased keys

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class ArchiveEntry:
    name: str
    data: bytes
    is_dir: bool = False
