"""Default macOS collaborators: app bundle builder, icon converter, signer."""

from dmg_bundler.macos.app import build_app_bundle, build_info_plist
from dmg_bundler.macos.icon import create_icns_file
from dmg_bundler.macos.sign import CodesignSigner, codesign_arguments

__all__ = [
    "build_app_bundle",
    "build_info_plist",
    "create_icns_file",
    "CodesignSigner",
    "codesign_arguments",
]
