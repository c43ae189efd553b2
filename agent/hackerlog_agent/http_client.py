"""
HTTP session with connection pooling, automatic retry, CA bundle, and proxy.

The agent only talks to the network for the core version check and the
archive download, both plain GETs. Pulses are sent by the core itself.
"""

import os

import certifi
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import log
from .validators import is_ntlm_proxy

_retry_strategy = Retry(
    total=3,
    backoff_factor=2,                           # Wait 2s, 4s, 8s between retries
    status_forcelist=[502, 503, 504],
    allowed_methods=["HEAD", "GET"],
)


def _get_ca_bundle():
    """
    Get the CA bundle path.

    Priority: env var → certifi.
    """
    env_ca = os.environ.get('REQUESTS_CA_BUNDLE') or os.environ.get('SSL_CERT_FILE')
    if env_ca and os.path.isfile(env_ca):
        return env_ca
    return certifi.where()


def proxy_map(proxy):
    """
    Turn the stored proxy string into a requests `proxies` dict.
    Returns None for a direct connection.
    """
    if not isinstance(proxy, str) or not proxy.strip():
        return None
    proxy = proxy.strip()
    if is_ntlm_proxy(proxy):
        log.warning("domain\\user proxies are not supported for downloads; connecting directly")
        return None
    if "://" not in proxy:
        proxy = "http://" + proxy
    return {"http": proxy, "https": proxy}


def create_session(proxy=None):
    """Create a new requests.Session with connection pooling, retry, SSL, and proxy."""
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=1,
        pool_maxsize=2,
        max_retries=_retry_strategy,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = _get_ca_bundle()
    proxies = proxy_map(proxy)
    if proxies:
        session.proxies.update(proxies)
    return session
