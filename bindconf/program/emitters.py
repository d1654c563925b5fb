"""WGSL text for resource declarations and entry points."""

from __future__ import annotations

from bindconf.program.kinds import ResourceKind


def resource_type(kind: ResourceKind) -> tuple[str | None, str]:
    """Return (address space, store type) for a resource kind.

    Handle types (textures and samplers) have no address space.
    """
    if kind is ResourceKind.UNIFORM:
        return ("uniform", "vec4<f32>")
    elif kind is ResourceKind.STORAGE:
        # Default read access, so the declaration is legal in every stage.
        return ("storage", "array<vec4<f32>, 4>")
    elif kind is ResourceKind.TEXTURE_1D:
        return (None, "texture_1d<f32>")
    elif kind is ResourceKind.TEXTURE_2D:
        return (None, "texture_2d<f32>")
    elif kind is ResourceKind.TEXTURE_2D_ARRAY:
        return (None, "texture_2d_array<f32>")
    elif kind is ResourceKind.TEXTURE_3D:
        return (None, "texture_3d<f32>")
    elif kind is ResourceKind.TEXTURE_CUBE:
        return (None, "texture_cube<f32>")
    elif kind is ResourceKind.TEXTURE_CUBE_ARRAY:
        return (None, "texture_cube_array<f32>")
    elif kind is ResourceKind.TEXTURE_MULTISAMPLED_2D:
        return (None, "texture_multisampled_2d<f32>")
    elif kind is ResourceKind.TEXTURE_EXTERNAL:
        return (None, "texture_external")
    elif kind is ResourceKind.TEXTURE_DEPTH_2D:
        return (None, "texture_depth_2d")
    elif kind is ResourceKind.TEXTURE_DEPTH_2D_ARRAY:
        return (None, "texture_depth_2d_array")
    elif kind is ResourceKind.TEXTURE_DEPTH_CUBE:
        return (None, "texture_depth_cube")
    elif kind is ResourceKind.TEXTURE_DEPTH_CUBE_ARRAY:
        return (None, "texture_depth_cube_array")
    elif kind is ResourceKind.TEXTURE_DEPTH_MULTISAMPLED_2D:
        return (None, "texture_depth_multisampled_2d")
    elif kind is ResourceKind.SAMPLER:
        return (None, "sampler")
    elif kind is ResourceKind.SAMPLER_COMPARISON:
        return (None, "sampler_comparison")
    raise ValueError(f"Unknown resource kind: {kind!r}")


def binding_attributes(group: int | None, binding: int | None) -> str:
    """Attribute prefix for a declaration, empty when neither is given."""
    parts = []
    if group is not None:
        parts.append(f"@group({group})")
    if binding is not None:
        parts.append(f"@binding({binding})")
    return " ".join(parts) + " " if parts else ""


def declare_var(
    name: str,
    type_name: str,
    address_space: str | None = None,
    group: int | None = None,
    binding: int | None = None,
) -> str:
    var = f"var<{address_space}>" if address_space else "var"
    return f"{binding_attributes(group, binding)}{var} {name} : {type_name};"


def declare_resource(
    kind: ResourceKind,
    name: str,
    group: int | None = None,
    binding: int | None = None,
) -> str:
    """Declare a module-scope resource, omitting absent attributes."""
    address_space, type_name = resource_type(kind)
    return declare_var(name, type_name, address_space, group, binding)


def declare_entrypoint(name: str, stage: str, body: str) -> str:
    """Declare an entry point for ``stage`` that executes ``body``."""
    if stage == "vertex":
        return (
            f"@vertex\n"
            f"fn {name}() -> @builtin(position) vec4f {{\n"
            f"  {body}\n"
            f"  return vec4f();\n"
            f"}}"
        )
    elif stage == "fragment":
        return f"@fragment\nfn {name}() {{\n  {body}\n}}"
    elif stage == "compute":
        return f"@compute @workgroup_size(1)\nfn {name}() {{\n  {body}\n}}"
    raise ValueError(f"Unknown shader stage '{stage}'")
