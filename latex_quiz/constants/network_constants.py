"""Network configuration constants for the quiz application."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000
SESSION_COOKIE_NAME: str = "latex_quiz_session"
SESSION_COOKIE_MAX_AGE_SECONDS: int = 60 * 60 * 24
MAX_ACTIVE_SESSIONS: int = 500
