"""Environment-driven configuration accessors."""

import os

# Big Buck Bunny HLS, used whenever a media item has no stream of its own
BUILTIN_DEFAULT_STREAM = "https://test-streams.mux.dev/x36xhzz/x36xhzz.m3u8"

DEFAULT_JW_PLAYLIST_URL = "https://cdn.jwplayer.com/v2/playlists/RmNmOuPr"


def get_default_page() -> str:
    """Page slug loaded when a navigation session starts or a retry falls back."""
    return os.environ.get("DEFAULT_PAGE", "home")


def get_default_platform() -> str:
    return os.environ.get("DEFAULT_PLATFORM", "TV")


def get_resolve_latency() -> float:
    """Artificial latency (in seconds) applied before each navigation reload."""
    raw = os.environ.get("RESOLVE_LATENCY_MS", "0")
    try:
        return max(0, int(raw)) / 1000
    except ValueError:
        return 0.0


def get_config_version() -> str:
    return os.environ.get("TV_CONFIG_VERSION", "1.0.0")


def get_default_stream_url() -> str:
    return os.environ.get("DEFAULT_STREAM_URL", BUILTIN_DEFAULT_STREAM)


def get_content_seed_path() -> str | None:
    """Optional override for the JSON content seed file."""
    return os.environ.get("CONTENT_SEED_PATH") or None


def get_jw_playlist_url() -> str:
    return os.environ.get("JW_PLAYLIST_URL", DEFAULT_JW_PLAYLIST_URL)


def get_llm_provider() -> str:
    return os.environ.get("LLM_PROVIDER", "gemini/gemini-2.5-flash")


def get_llm_api_key() -> str | None:
    return os.environ.get("LLM_API_KEY") or None


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()


def get_sentry_dsn() -> str | None:
    return os.environ.get("SENTRY_DSN") or None


def get_session_idle_timeout() -> float:
    """Seconds a navigation session may go untouched before it is evicted."""
    raw = os.environ.get("SESSION_IDLE_TIMEOUT_S", "1800")
    try:
        return max(0, int(raw))
    except ValueError:
        return 1800


def get_max_sessions() -> int:
    raw = os.environ.get("MAX_SESSIONS", "1000")
    try:
        return max(1, int(raw))
    except ValueError:
        return 1000


def get_port() -> int:
    return int(os.environ.get("PORT", "8000"))
