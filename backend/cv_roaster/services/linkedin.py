"""LinkedIn profile handling.

Profiles are never fetched: LinkedIn blocks automated access, so a URL-only
request is roasted against a fixed note asking the user to paste their
profile instead.
"""

from cv_roaster.core.constants import LINKEDIN_PROFILE_MARKER
from cv_roaster.core.errors import InvalidProfileUrlError, MissingInputError
from cv_roaster.models import ProfileContentRoastRequest, ProfileUrlRoastRequest, RoastRequest

PROFILE_PLACEHOLDER = (
    "Please copy and paste your LinkedIn profile content including:\n"
    "- Your headline\n"
    "- About section\n"
    "- Experience descriptions\n"
    "- Skills section\n"
    "- Recent posts\n\n"
    "This will allow me to give you better feedback since LinkedIn blocks automated access."
)


def is_profile_url(url: str) -> bool:
    return LINKEDIN_PROFILE_MARKER in url


def profile_placeholder() -> str:
    """Stand-in content for a profile URL. Same text for every URL."""
    return PROFILE_PLACEHOLDER


def build_linkedin_request(url: str | None, content: str | None) -> RoastRequest:
    """Pick the roast request kind for a LinkedIn body.

    Pasted content wins over the URL; a URL alone must point at a profile.

    Raises:
        MissingInputError: neither url nor content given (empty counts as missing).
        InvalidProfileUrlError: url is not a linkedin.com/in/ profile URL.
    """
    if not url and not content:
        raise MissingInputError("Please provide either a LinkedIn URL or profile content")

    if content:
        return ProfileContentRoastRequest(content=content, url=url or None)

    if not is_profile_url(url):
        raise InvalidProfileUrlError()

    return ProfileUrlRoastRequest(url=url)
