"""Resource kinds exercised by the binding scenarios."""

from __future__ import annotations
from enum import Enum


class ResourceKind(Enum):
    UNIFORM = "uniform"
    STORAGE = "storage"
    TEXTURE_1D = "texture_1d"
    TEXTURE_2D = "texture_2d"
    TEXTURE_2D_ARRAY = "texture_2d_array"
    TEXTURE_3D = "texture_3d"
    TEXTURE_CUBE = "texture_cube"
    TEXTURE_CUBE_ARRAY = "texture_cube_array"
    TEXTURE_MULTISAMPLED_2D = "texture_multisampled_2d"
    TEXTURE_EXTERNAL = "texture_external"
    TEXTURE_DEPTH_2D = "texture_depth_2d"
    TEXTURE_DEPTH_2D_ARRAY = "texture_depth_2d_array"
    TEXTURE_DEPTH_CUBE = "texture_depth_cube"
    TEXTURE_DEPTH_CUBE_ARRAY = "texture_depth_cube_array"
    TEXTURE_DEPTH_MULTISAMPLED_2D = "texture_depth_multisampled_2d"
    SAMPLER = "sampler"
    SAMPLER_COMPARISON = "sampler_comparison"

    def __str__(self):
        return self.value


# Resource pairs for the collision scenarios are drawn from KINDS_A x KINDS_B.
KINDS_A = (
    ResourceKind.UNIFORM,
    ResourceKind.TEXTURE_2D,
    ResourceKind.TEXTURE_CUBE,
    ResourceKind.TEXTURE_DEPTH_2D,
    ResourceKind.SAMPLER,
)

KINDS_B = (
    ResourceKind.STORAGE,
    ResourceKind.TEXTURE_3D,
    ResourceKind.TEXTURE_MULTISAMPLED_2D,
    ResourceKind.TEXTURE_DEPTH_CUBE_ARRAY,
    ResourceKind.SAMPLER_COMPARISON,
)

KINDS_ALL = tuple(ResourceKind)
