from novelai_image.core.encoding import to_base64, to_data_url
from novelai_image.core.exceptions import ErrorKind, ErrorRecord, NovelAIError
from novelai_image.core.logging import configure_logging
from novelai_image.domain.enums import NoiseSchedule, NovelAIModel, NovelAISampler, UCPreset
from novelai_image.domain.models import (
    Caption,
    GenerateImagePayload,
    GenerationParameters,
    ImageMetadata,
    ImageResult,
    V4ConditionInput,
)
from novelai_image.services.client import NovelAIClient
from novelai_image.services.request_builder import ImageRequestBuilder
from novelai_image.validators.constraints import (
    PromptWarning,
    check_prompt_length,
    validate_resolution,
    validate_scale,
    validate_seed,
    validate_steps,
)

__all__ = [
    "NovelAIClient",
    "ImageRequestBuilder",
    "NovelAIModel",
    "NovelAISampler",
    "UCPreset",
    "NoiseSchedule",
    "Caption",
    "V4ConditionInput",
    "GenerationParameters",
    "GenerateImagePayload",
    "ImageMetadata",
    "ImageResult",
    "ErrorKind",
    "ErrorRecord",
    "NovelAIError",
    "PromptWarning",
    "check_prompt_length",
    "validate_resolution",
    "validate_scale",
    "validate_seed",
    "validate_steps",
    "to_base64",
    "to_data_url",
    "configure_logging",
]
