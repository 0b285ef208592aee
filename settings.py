# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-08-30
# Updated: 2026-10-02
# Description: settings.py
# -----------------------------------------------------------------------------
import os


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------
# Fuzzy match permissiveness: 0.0 exact only, 1.0 matches anything
FUZZY_THRESHOLD = _env_float("CRM_FUZZY_THRESHOLD", 0.4)

# Top-K for semantic search when the caller does not pass a limit
SEMANTIC_LIMIT = _env_int("CRM_SEMANTIC_LIMIT", 10)

# Cap applied to the fuzzy-only and semantic-only buckets of a hybrid search
HYBRID_BUCKET_CAP = _env_int("CRM_HYBRID_BUCKET_CAP", 5)


# -----------------------------------------------------------------------------
# Assistant
# -----------------------------------------------------------------------------
AGENT_MAX_STEPS = _env_int("CRM_AGENT_MAX_STEPS", 10)
AGENT_TEMPERATURE = _env_float("CRM_AGENT_TEMPERATURE", 0.2)
AGENT_MAX_TOKENS = _env_int("CRM_AGENT_MAX_TOKENS", 1024)

# Used when the title model is unavailable or no first message was given
DEFAULT_THREAD_NAME = _env("CRM_DEFAULT_THREAD_NAME", "New conversation")


# -----------------------------------------------------------------------------
# Pagination
# -----------------------------------------------------------------------------
PAGINATION_DEFAULT_LIMIT = _env_int("CRM_PAGINATION_DEFAULT_LIMIT", 20)
PAGINATION_MAX_LIMIT = _env_int("CRM_PAGINATION_MAX_LIMIT", 200)


# -----------------------------------------------------------------------------
# Keep-alive
# -----------------------------------------------------------------------------
KEEPALIVE_INTERVAL_DAYS = _env_int("CRM_KEEPALIVE_INTERVAL_DAYS", 5)

# Blank disables the secret check
KEEPALIVE_SECRET = _env("KEEPALIVE_SECRET", "")


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if not 0.0 <= FUZZY_THRESHOLD <= 1.0:
    raise RuntimeError(f"CRM_FUZZY_THRESHOLD must be within [0, 1], got {FUZZY_THRESHOLD}")

if HYBRID_BUCKET_CAP < 1:
    raise RuntimeError("CRM_HYBRID_BUCKET_CAP must be at least 1")

if PAGINATION_DEFAULT_LIMIT > PAGINATION_MAX_LIMIT:
    raise RuntimeError("CRM_PAGINATION_DEFAULT_LIMIT cannot exceed CRM_PAGINATION_MAX_LIMIT")
