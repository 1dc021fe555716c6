import math
from dataclasses import dataclass
from numbers import Real

from novelai_image.core.entropy import MAX_SEED
from novelai_image.core.exceptions import NovelAIError

MIN_STEPS, MAX_STEPS = 1, 50
MIN_SCALE, MAX_SCALE = 0, 10
RESOLUTION_STEP = 64
DEFAULT_PROMPT_LIMIT = 2000


@dataclass(frozen=True)
class PromptWarning:
    exceeds: bool
    length: int
    limit: int


def _is_int(value) -> bool:
    # bool is an int subclass but never a valid numeric parameter here
    return isinstance(value, int) and not isinstance(value, bool)


def validate_resolution(width, height) -> None:
    if not _is_int(width) or not _is_int(height):
        raise NovelAIError.validation("Width and height must be integers")
    if width <= 0 or height <= 0:
        raise NovelAIError.validation("Width and height must be positive")
    if width % RESOLUTION_STEP != 0:
        raise NovelAIError.validation(f"Width must be a multiple of 64, got {width}")
    if height % RESOLUTION_STEP != 0:
        raise NovelAIError.validation(f"Height must be a multiple of 64, got {height}")


def validate_steps(steps) -> None:
    if not _is_int(steps):
        raise NovelAIError.validation("Steps must be an integer")
    if steps < MIN_STEPS or steps > MAX_STEPS:
        raise NovelAIError.validation(f"Steps must be between 1 and 50, got {steps}")


def validate_scale(scale) -> None:
    if isinstance(scale, bool) or not isinstance(scale, Real) or not math.isfinite(scale):
        raise NovelAIError.validation("Scale must be a number")
    if scale < MIN_SCALE or scale > MAX_SCALE:
        raise NovelAIError.validation(f"Scale must be between 0 and 10, got {scale}")


def validate_seed(seed) -> None:
    if not _is_int(seed):
        raise NovelAIError.validation("Seed must be an integer")
    if seed < 0 or seed > MAX_SEED:
        raise NovelAIError.validation(f"Seed must be between 0 and 2^32-1, got {seed}")


def check_prompt_length(text: str, limit: int = DEFAULT_PROMPT_LIMIT) -> PromptWarning:
    """
    Advisory only: long prompts get truncated by the service's tokenizer,
    but they are not rejected, so neither do we.
    """
    length = len(text)
    return PromptWarning(exceeds=length > limit, length=length, limit=limit)
