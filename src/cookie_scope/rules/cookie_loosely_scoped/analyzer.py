"""Domain scope comparison — decide whether a cookie's Domain reaches beyond its origin host.

Both names are compared as dot-separated label lists, right to left. The
"same registrable domain" test only looks at the last two labels; there is no
public suffix list, so names under suffixes like co.uk or github.io are
compared as if their registrable domain were the suffix itself.

All functions here are pure and safe to call concurrently.
"""

from __future__ import annotations

_PLACEHOLDER_HOST = "null"


def split_labels(value: str) -> list[str]:
    """Split a domain or host name into labels.

    Trailing empty labels are dropped, leading ones are kept:
    "example.com." -> ["example", "com"], ".example.com" -> ["", "example", "com"],
    "" and "." -> [].
    """
    labels = value.split(".")
    while labels and not labels[-1]:
        labels.pop()
    return labels


def same_registrable_domain(cookie_labels: list[str], host_labels: list[str]) -> bool:
    """Return True if both names share their last two labels (case-insensitive).

    Empty label lists and the "null" placeholder host compare as matching, so
    degenerate input is never reported.
    """
    if (
        not cookie_labels
        or not host_labels
        or cookie_labels[0].lower() == _PLACEHOLDER_HOST
        or host_labels[0].lower() == _PLACEHOLDER_HOST
    ):
        return True
    if cookie_labels[-1].lower() != host_labels[-1].lower():
        return False
    if (
        len(cookie_labels) < 2
        or len(host_labels) < 2
        or cookie_labels[-2].lower() != host_labels[-2].lower()
    ):
        return False
    return True


def is_loosely_scoped(cookie_domain: str | None, host: str) -> bool:
    """Return True if a cookie with this Domain attribute is loosely scoped for host.

    A cookie is loosely scoped when its domain is a strict suffix of the host
    (fewer labels, all matching from the right), e.g. "example.com" set by
    "www.example.com". A domain outside the host's registrable domain is
    reported as loosely scoped as well.
    """
    # no Domain attribute: the browser scopes the cookie to the exact host
    if not cookie_domain:
        return False

    cookie_labels = split_labels(cookie_domain)
    host_labels = split_labels(host)

    if not same_registrable_domain(cookie_labels, host_labels):
        return True

    # From here on both names share a registrable domain. A separate exact
    # match check for dotless domains outside it can never apply.

    if len(cookie_labels) != 2:
        # drop the leading "." of ".example.com" style domains
        cookie_labels = split_labels(cookie_domain[1:])

    if not cookie_labels or len(cookie_labels) >= len(host_labels):
        return False

    for cookie_label, host_label in zip(reversed(cookie_labels), reversed(host_labels)):
        if cookie_label.lower() != host_label.lower():
            return False

    return True


class DomainScopeAnalyzer:
    """Stateless wrapper for callers that take the analyzer as a collaborator."""

    @staticmethod
    def is_loosely_scoped(cookie_domain: str | None, host: str) -> bool:
        return is_loosely_scoped(cookie_domain, host)

    @staticmethod
    def same_registrable_domain(cookie_labels: list[str], host_labels: list[str]) -> bool:
        return same_registrable_domain(cookie_labels, host_labels)
