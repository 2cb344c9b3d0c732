"""Checks that must pass before sites are scanned."""

from wpactive.network import NetworkBackend
from wpactive.utils.debug import debug_print

from .models import PreflightResult, PreflightStatus


def run_preflight(network: NetworkBackend, target: str) -> PreflightResult:
    """Check the deployment and the plugin slug without touching any site."""
    if not network.is_multisite():
        return PreflightResult(
            PreflightStatus.NOT_MULTISITE,
            "This only works on Multisite installations. "
            "Use `wp plugin list` on regular installations.",
        )

    installed = network.installed_plugins()
    debug_print("preflight", f"{len(installed)} plugins installed", Installed=sorted(installed))
    if target not in installed:
        return PreflightResult(PreflightStatus.NOT_INSTALLED, f"{target} is not installed.")

    network_active = network.network_active_plugins()
    debug_print("preflight", "network-activated plugins", Plugins=sorted(network_active))
    if target in network_active:
        return PreflightResult(
            PreflightStatus.NETWORK_ACTIVATED, f"{target} is network-activated."
        )

    return PreflightResult(PreflightStatus.PROCEED)
