from typing import TYPE_CHECKING, List, Optional, Sequence, Type, TypeVar

import structlog

from novelai_image.core.entropy import SeedSource, random_seed
from novelai_image.core.exceptions import NovelAIError
from novelai_image.domain.enums import NoiseSchedule, NovelAIModel, NovelAISampler, UCPreset
from novelai_image.domain.models import (
    Caption,
    GenerateImagePayload,
    GenerationParameters,
    ImageResult,
    V4ConditionInput,
)
from novelai_image.validators.constraints import (
    check_prompt_length,
    validate_resolution,
    validate_scale,
    validate_seed,
    validate_steps,
)

if TYPE_CHECKING:
    from novelai_image.services.client import NovelAIClient

logger = structlog.get_logger()

E = TypeVar("E")

CHARACTER_SEPARATOR = " | "


def _coerce(enum_cls: Type[E], value, label: str) -> E:
    try:
        return enum_cls(value)  # type: ignore[call-arg]
    except ValueError:
        allowed = ", ".join(str(member.value) for member in enum_cls)  # type: ignore[attr-defined]
        raise NovelAIError.validation(f"Unknown {label}: {value!r} (expected one of {allowed})") from None


class ImageRequestBuilder:
    """
    Fluent builder for NovelAI generation requests.

    Every mutator validates its input immediately, mutates in place and
    returns the builder, so calls chain. `build_payload` is a pure
    projection of the current state; `generate` is the only method that
    touches the network.

    A builder has a single owner and is mutated sequentially; it is not
    safe to share one between concurrent tasks.
    """

    def __init__(self, client: Optional["NovelAIClient"] = None, seed_source: Optional[SeedSource] = None):
        self._client = client

        self._model = NovelAIModel.V45_FULL
        self._width = 832
        self._height = 1216
        self._prompt = ""
        self._character_prompts: List[str] = []
        self._negative_prompt = ""
        self._character_negative_prompts: List[str] = []
        self._seed = (seed_source or random_seed)()
        self._steps = 23
        self._scale = 5.0
        self._n_samples = 1
        self._sampler = NovelAISampler.EULER_ANCESTRAL
        self._uc_preset = UCPreset.HEAVY
        self._quality_toggle = True
        self._smea = False
        self._smea_dyn = False
        self._dynamic_thresholding = False
        self._noise_schedule = NoiseSchedule.KARRAS

    # --- Model & canvas ---

    def set_model(self, model: NovelAIModel) -> "ImageRequestBuilder":
        self._model = _coerce(NovelAIModel, model, "model")
        return self

    def set_size(self, width: int, height: int) -> "ImageRequestBuilder":
        """Raises a validation error unless both sides are positive multiples of 64."""
        validate_resolution(width, height)
        self._width = width
        self._height = height
        return self

    # --- Prompts ---

    def set_prompt(self, base: str, characters: Optional[Sequence[str]] = None) -> "ImageRequestBuilder":
        """
        Sets the base scene description. When `characters` is given it
        replaces the per-character prompts; their order is the order the
        characters are composed in.
        """
        warning = check_prompt_length(base)
        if warning.exceeds:
            logger.warning("prompt_exceeds_recommended_length", length=warning.length, limit=warning.limit)

        self._prompt = base
        if characters is not None:
            self._character_prompts = list(characters)
        return self

    def add_character(self, character_prompt: str) -> "ImageRequestBuilder":
        self._character_prompts.append(character_prompt)
        return self

    def set_negative_prompt(self, base: str, character_negatives: Optional[Sequence[str]] = None) -> "ImageRequestBuilder":
        self._negative_prompt = base
        if character_negatives is not None:
            self._character_negative_prompts = list(character_negatives)
        return self

    def add_character_negative(self, negative_prompt: str) -> "ImageRequestBuilder":
        # Pairs positionally with the character added by add_character()
        self._character_negative_prompts.append(negative_prompt)
        return self

    # --- Sampling ---

    def set_seed(self, seed: int) -> "ImageRequestBuilder":
        validate_seed(seed)
        self._seed = seed
        return self

    def set_steps(self, steps: int) -> "ImageRequestBuilder":
        validate_steps(steps)
        self._steps = steps
        return self

    def set_cfg_scale(self, scale: float) -> "ImageRequestBuilder":
        """Classifier-free guidance: higher values follow the prompt more strictly."""
        validate_scale(scale)
        self._scale = float(scale)
        return self

    def set_batch_size(self, count: int) -> "ImageRequestBuilder":
        # Every extra sample costs Anlas
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise NovelAIError.validation(f"Batch size must be a positive integer, got {count!r}")
        self._n_samples = count
        return self

    def set_sampler(self, sampler: NovelAISampler) -> "ImageRequestBuilder":
        self._sampler = _coerce(NovelAISampler, sampler, "sampler")
        return self

    def set_negative_preset(self, preset: UCPreset) -> "ImageRequestBuilder":
        self._uc_preset = _coerce(UCPreset, preset, "negative preset")
        return self

    def enable_auto_quality_tags(self, enabled: bool = True) -> "ImageRequestBuilder":
        self._quality_toggle = bool(enabled)
        return self

    def enable_smea(self, dynamic: bool = False) -> "ImageRequestBuilder":
        self._smea = True
        self._smea_dyn = bool(dynamic)
        return self

    def disable_smea(self) -> "ImageRequestBuilder":
        self._smea = False
        self._smea_dyn = False
        return self

    def set_noise_schedule(self, schedule: NoiseSchedule) -> "ImageRequestBuilder":
        self._noise_schedule = _coerce(NoiseSchedule, schedule, "noise schedule")
        return self

    def enable_dynamic_thresholding(self) -> "ImageRequestBuilder":
        """Boosts contrast at high guidance scales (scale > 7)."""
        self._dynamic_thresholding = True
        return self

    def disable_dynamic_thresholding(self) -> "ImageRequestBuilder":
        self._dynamic_thresholding = False
        return self

    # --- Projection ---

    def _build_input_string(self) -> str:
        if not self._character_prompts:
            return self._prompt
        return CHARACTER_SEPARATOR.join([self._prompt, *self._character_prompts])

    @staticmethod
    def _build_condition(base: str, characters: Sequence[str]) -> V4ConditionInput:
        return V4ConditionInput(caption=Caption(base_caption=base, char_captions=tuple(characters)))

    def build_payload(self) -> GenerateImagePayload:
        parameters = GenerationParameters(
            width=self._width,
            height=self._height,
            scale=self._scale,
            sampler=self._sampler,
            steps=self._steps,
            n_samples=self._n_samples,
            seed=self._seed,
            negative_prompt=self._negative_prompt,
            v4_prompt=self._build_condition(self._prompt, self._character_prompts),
            v4_negative_prompt=self._build_condition(self._negative_prompt, self._character_negative_prompts),
            qualityToggle=self._quality_toggle,
            ucPreset=self._uc_preset,
            noise_schedule=self._noise_schedule,
            sm=self._smea,
            # Dynamic SMEA is meaningless without SMEA itself
            sm_dyn=self._smea and self._smea_dyn,
            dynamic_thresholding=self._dynamic_thresholding,
        )

        return GenerateImagePayload(input=self._build_input_string(), model=self._model, parameters=parameters)

    async def generate(self) -> ImageResult:
        if self._client is None:
            raise NovelAIError.validation("This builder is not bound to a client; create it with NovelAIClient.image()")
        return await self._client._execute(self.build_payload())
