"""
Smart links: link targets derived from a platform template and a handle.

Every Platform has exactly one SmartLink entry. A platform without a URL
template takes its target verbatim (raw URLs gain https:// when they have
no scheme); templated platforms substitute the user's handle or id.
"""

import re
from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Dict, Optional, Pattern


class Platform(str, Enum):
    TWITTER = "twitter"
    INSTAGRAM = "instagram"
    YOUTUBE = "youtube"
    GITHUB = "github"
    TIKTOK = "tiktok"
    TWITCH = "twitch"
    DISCORD = "discord"
    TELEGRAM = "telegram"
    MAIL = "mail"
    THREADS = "threads"
    SPOTIFY = "spotify"
    GLOBE = "globe"
    LINK = "link"


class InputKind(str, Enum):
    USERNAME = "username"
    URL = "url"
    ID = "id"
    EMAIL = "email"


class SmartLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    platform: Platform
    label: str
    placeholder: str
    url_template: Optional[str] = None
    input_kind: InputKind
    description: str
    copy_action: bool = False


_SMART_LINK_LIST = [
    SmartLink(platform=Platform.TWITTER, label="Twitter / X", placeholder="username",
              url_template="https://twitter.com/{value}", input_kind=InputKind.USERNAME,
              description="Your Twitter/X username without @"),
    SmartLink(platform=Platform.INSTAGRAM, label="Instagram", placeholder="username",
              url_template="https://instagram.com/{value}", input_kind=InputKind.USERNAME,
              description="Your Instagram username"),
    SmartLink(platform=Platform.YOUTUBE, label="YouTube", placeholder="@channel or channel URL",
              url_template="https://youtube.com/@{value}", input_kind=InputKind.USERNAME,
              description="Your YouTube channel handle"),
    SmartLink(platform=Platform.GITHUB, label="GitHub", placeholder="username",
              url_template="https://github.com/{value}", input_kind=InputKind.USERNAME,
              description="Your GitHub username"),
    SmartLink(platform=Platform.TIKTOK, label="TikTok", placeholder="username",
              url_template="https://tiktok.com/@{value}", input_kind=InputKind.USERNAME,
              description="Your TikTok username without @"),
    SmartLink(platform=Platform.TWITCH, label="Twitch", placeholder="username",
              url_template="https://twitch.tv/{value}", input_kind=InputKind.USERNAME,
              description="Your Twitch username"),
    SmartLink(platform=Platform.DISCORD, label="Discord", placeholder="User ID (e.g., 123456789)",
              url_template=None, input_kind=InputKind.ID,
              description="Your Discord User ID - will be copied on click", copy_action=True),
    SmartLink(platform=Platform.TELEGRAM, label="Telegram", placeholder="username",
              url_template="https://t.me/{value}", input_kind=InputKind.USERNAME,
              description="Your Telegram username"),
    SmartLink(platform=Platform.MAIL, label="Email", placeholder="you@example.com",
              url_template="mailto:{value}", input_kind=InputKind.EMAIL,
              description="Your email address"),
    SmartLink(platform=Platform.THREADS, label="Threads", placeholder="username",
              url_template="https://threads.net/@{value}", input_kind=InputKind.USERNAME,
              description="Your Threads username"),
    SmartLink(platform=Platform.SPOTIFY, label="Spotify", placeholder="profile URL or ID",
              url_template="https://open.spotify.com/user/{value}", input_kind=InputKind.USERNAME,
              description="Your Spotify profile ID"),
    SmartLink(platform=Platform.GLOBE, label="Website", placeholder="https://example.com",
              url_template=None, input_kind=InputKind.URL,
              description="Full website URL"),
    SmartLink(platform=Platform.LINK, label="Custom Link", placeholder="https://example.com",
              url_template=None, input_kind=InputKind.URL,
              description="Any custom URL"),
]

SMART_LINKS: Dict[Platform, SmartLink] = {sl.platform: sl for sl in _SMART_LINK_LIST}

# Used to recover the handle from a stored URL
_VALUE_PATTERNS: Dict[Platform, Pattern] = {
    Platform.TWITTER: re.compile(r"(?:twitter\.com|x\.com)/([^/?]+)", re.IGNORECASE),
    Platform.INSTAGRAM: re.compile(r"instagram\.com/([^/?]+)", re.IGNORECASE),
    Platform.YOUTUBE: re.compile(r"youtube\.com/@?([^/?]+)", re.IGNORECASE),
    Platform.GITHUB: re.compile(r"github\.com/([^/?]+)", re.IGNORECASE),
    Platform.TIKTOK: re.compile(r"tiktok\.com/@?([^/?]+)", re.IGNORECASE),
    Platform.TWITCH: re.compile(r"twitch\.tv/([^/?]+)", re.IGNORECASE),
    Platform.TELEGRAM: re.compile(r"t\.me/([^/?]+)", re.IGNORECASE),
    Platform.MAIL: re.compile(r"^mailto:(.+)$", re.IGNORECASE),
    Platform.THREADS: re.compile(r"threads\.net/@?([^/?]+)", re.IGNORECASE),
    Platform.SPOTIFY: re.compile(r"open\.spotify\.com/user/([^/?]+)", re.IGNORECASE),
}


def get_smart_link(platform) -> SmartLink:
    """Look up a platform by enum member or tag; raises ValueError for unknown tags"""
    return SMART_LINKS[Platform(platform)]


def ensure_scheme(url: str) -> str:
    url = url.strip()
    if url.lower().startswith(("http://", "https://", "mailto:")):
        return url
    return f"https://{url}"


def build_url(platform, value: str) -> str:
    """Turn a handle/id/URL typed by the user into the link target"""
    smart_link = get_smart_link(platform)
    clean_value = value.strip()

    if not smart_link.url_template:
        if smart_link.input_kind == InputKind.URL:
            return ensure_scheme(clean_value)
        return clean_value

    if smart_link.input_kind == InputKind.USERNAME and clean_value.startswith("@"):
        clean_value = clean_value[1:]

    return smart_link.url_template.replace("{value}", clean_value)


def resolve_link_url(platform, url: Optional[str] = None, value: Optional[str] = None) -> str:
    """Target for a link given either a platform value or a raw URL"""
    if value:
        return build_url(platform, value)
    smart_link = get_smart_link(platform)
    if smart_link.url_template or smart_link.input_kind == InputKind.URL:
        return ensure_scheme(url)
    return url.strip()


def extract_value_from_url(url: str, platform) -> str:
    """Best-effort inverse of build_url; returns the URL unchanged when nothing matches"""
    try:
        smart_link = get_smart_link(platform)
    except ValueError:
        return url
    if not smart_link.url_template:
        return url

    pattern = _VALUE_PATTERNS.get(smart_link.platform)
    if pattern:
        match = pattern.search(url)
        if match:
            return match.group(1)

    return url
