"""Alert tags — cross-references from findings to public classification schemes."""

from __future__ import annotations

from enum import Enum


class AlertTag(Enum):
    OWASP_2021_A08_INTEGRITY_FAIL = (
        "OWASP_2021_A08",
        "https://owasp.org/Top10/A08_2021-Software_and_Data_Integrity_Failures/",
    )
    OWASP_2017_A06_SEC_MISCONFIG = (
        "OWASP_2017_A06",
        "https://owasp.org/www-project-top-ten/2017/A6_2017-Security_Misconfiguration.html",
    )
    WSTG_V42_SESS_02_COOKIE_ATTRS = (
        "WSTG-v42-SESS-02",
        "https://owasp.org/www-project-web-security-testing-guide/v42/"
        "4-Web_Application_Security_Testing/06-Session_Management_Testing/"
        "02-Testing_for_Cookies_Attributes",
    )

    @property
    def tag(self) -> str:
        return self.value[0]

    @property
    def url(self) -> str:
        return self.value[1]


def to_map(*tags: AlertTag) -> dict[str, str]:
    """Build the tag → reference URL mapping attached to findings."""
    return {t.tag: t.url for t in tags}
