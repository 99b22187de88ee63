"""DMG assembly stages."""

from dmg_bundler.dmg.arguments import (
    DmgArgumentOptions,
    build_dmg_arguments,
    invocation_arguments,
    is_ci_environment,
)
from dmg_bundler.dmg.finalize import Signer, finalize_artifact
from dmg_bundler.dmg.layout import (
    AttachmentPair,
    LayoutEntry,
    WindowLayout,
    compute_attachment_layout,
    compute_window_layout,
    pair_attachments,
)
from dmg_bundler.dmg.paths import DmgPaths, normalize_arch, plan_dmg_paths
from dmg_bundler.dmg.resources import StagedResources, stage_support_resources

__all__ = [
    "DmgArgumentOptions",
    "build_dmg_arguments",
    "invocation_arguments",
    "is_ci_environment",
    "Signer",
    "finalize_artifact",
    "AttachmentPair",
    "LayoutEntry",
    "WindowLayout",
    "compute_attachment_layout",
    "compute_window_layout",
    "pair_attachments",
    "DmgPaths",
    "normalize_arch",
    "plan_dmg_paths",
    "StagedResources",
    "stage_support_resources",
]
