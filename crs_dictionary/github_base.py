# github_base.py

import json
import urllib.parse
import urllib.request

# --- SHARED CONFIG ---
API_ROOT = "https://api.github.com"
API_VERSION = "2022-11-28"
USER_AGENT = "CRS-PHP-Dictionary-Creator"
PHP_REPO_GITHUB = "https://github.com/php/php-src"


# --- UTILITIES ---
def build_headers(token):
    """Headers for authenticated GitHub REST calls."""
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": API_VERSION,
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def code_search_url(term, language):
    """URL of a single-result code search for `term` in `language`."""
    query = urllib.parse.quote(term, safe="")
    return f"{API_ROOT}/search/code?q={query}+language:{language}&type=Code&per_page=1"


def rate_limit_exhausted(headers):
    """True when GitHub reports no remaining quota in the response headers."""
    if headers is None:
        return False
    remaining = headers.get("x-ratelimit-remaining")
    return remaining is not None and str(remaining).strip() == "0"


def make_request(url, headers, opener=urllib.request.urlopen, timeout=30):
    """Shared HTTP handler. Returns (decoded JSON body, response headers)."""
    req = urllib.request.Request(url, headers=headers)
    with opener(req, timeout=timeout) as resp:
        return json.load(resp), resp.headers
