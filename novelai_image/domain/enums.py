from enum import Enum, IntEnum


class NovelAIModel(str, Enum):
    # V4.5 Full: newest model, T5 encoder and multi-character support
    V45_FULL = "nai-diffusion-4-5-full"
    V4_CURATED = "nai-diffusion-4-curated"
    INPAINTING = "nai-diffusion-4-inpainting"


class NovelAISampler(str, Enum):
    EULER = "k_euler"
    EULER_ANCESTRAL = "k_euler_ancestral"
    DPM_2M = "k_dpmpp_2m"
    DPM_2S_ANCESTRAL = "k_dpmpp_2s_ancestral"
    DPM_SDE = "k_dpmpp_sde"
    DDIM = "ddim_v3"


class UCPreset(IntEnum):
    """Preset undesired-content filters applied on top of the negative prompt."""

    HEAVY = 0  # Low Quality + Bad Anatomy
    LIGHT = 1  # Low Quality only
    NONE = 2  # Custom negative prompt only


class NoiseSchedule(str, Enum):
    NATIVE = "native"
    KARRAS = "karras"
    EXPONENTIAL = "exponential"
    POLYEXPONENTIAL = "polyexponential"
