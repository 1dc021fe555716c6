import math

import pytest

from novelai_image.core.exceptions import ErrorKind, NovelAIError
from novelai_image.validators.constraints import (
    check_prompt_length,
    validate_resolution,
    validate_scale,
    validate_seed,
    validate_steps,
)


@pytest.mark.parametrize("width,height", [(64, 64), (832, 1216), (1024, 1024), (1216, 832), (2048, 64)])
def test_resolution_accepts_multiples_of_64(width, height):
    validate_resolution(width, height)


@pytest.mark.parametrize(
    "width,height,expected",
    [
        (1000, 1024, "Width must be a multiple of 64, got 1000"),
        (1024, 1000, "Height must be a multiple of 64, got 1000"),
        (0, 1024, "positive"),
        (1024, -64, "positive"),
        (832.0, 1216, "integers"),
        (True, 1216, "integers"),
    ],
)
def test_resolution_rejects_invalid_dimensions(width, height, expected):
    with pytest.raises(NovelAIError) as exc_info:
        validate_resolution(width, height)

    assert expected in str(exc_info.value)
    assert exc_info.value.kind == ErrorKind.VALIDATION
    assert not exc_info.value.retryable


@pytest.mark.parametrize("steps", [1, 23, 50])
def test_steps_in_range(steps):
    validate_steps(steps)


@pytest.mark.parametrize("steps", [0, 51, -3, 1000])
def test_steps_out_of_range(steps):
    with pytest.raises(NovelAIError, match="between 1 and 50"):
        validate_steps(steps)


def test_steps_must_be_integer():
    with pytest.raises(NovelAIError, match="integer"):
        validate_steps(23.5)


@pytest.mark.parametrize("scale", [0, 0.0, 5, 5.5, 10, 10.0])
def test_scale_in_range(scale):
    validate_scale(scale)


@pytest.mark.parametrize("scale", [-0.1, 10.01, 100])
def test_scale_out_of_range(scale):
    with pytest.raises(NovelAIError, match="between 0 and 10"):
        validate_scale(scale)


@pytest.mark.parametrize("scale", [math.nan, math.inf, "5", None, True])
def test_scale_rejects_non_numbers(scale):
    with pytest.raises(NovelAIError, match="Scale must be a number"):
        validate_scale(scale)


@pytest.mark.parametrize("seed", [0, 1, 2**31, 2**32 - 1])
def test_seed_in_range(seed):
    validate_seed(seed)


@pytest.mark.parametrize("seed", [-1, 2**32])
def test_seed_out_of_range(seed):
    with pytest.raises(NovelAIError, match="2\\^32-1"):
        validate_seed(seed)


def test_seed_must_be_integer():
    with pytest.raises(NovelAIError, match="integer"):
        validate_seed(1.5)


def test_prompt_length_over_limit():
    warning = check_prompt_length("a" * 2001)

    assert warning.exceeds is True
    assert warning.length == 2001
    assert warning.limit == 2000


def test_prompt_length_at_limit():
    warning = check_prompt_length("a" * 2000)

    assert warning.exceeds is False
    assert warning.length == 2000


def test_prompt_length_custom_limit():
    warning = check_prompt_length("hello world", limit=5)

    assert warning.exceeds is True
    assert warning.limit == 5
