"""Classification of registry hostnames."""
from urllib.parse import urlsplit

# Registry domains served by Google; any subdomain is also managed
MANAGED_REGISTRY_DOMAINS = (
    "gcr.io",
    "gcr.kubernetes.io",
    "container.cloud.google.com",
    "pkg.dev",
)


def _hostname(server_url: str) -> str:
    if "://" not in server_url:
        server_url = "https://" + server_url
    try:
        return (urlsplit(server_url).hostname or "").rstrip(".")
    except ValueError:
        return ""


def is_managed_hostname(server_url: str) -> bool:
    """
    Check whether a server URL belongs to a Google managed registry.

    Args:
        server_url: Hostname, optionally with scheme, port or path

    Returns:
        True if the host equals or is a subdomain of a managed domain
    """
    host = _hostname(server_url)
    if not host:
        return False
    return any(host == domain or host.endswith("." + domain) for domain in MANAGED_REGISTRY_DOMAINS)
