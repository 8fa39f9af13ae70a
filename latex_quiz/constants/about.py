"""Static metadata describing the LaTeX symbol quiz."""

APP_NAME = "LaTeX Symbol Quiz"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "A small quiz that renders LaTeX notation and asks you for the command that produced it. "
    "Pick a difficulty, type the command name without the leading backslash, and see how many you know."
)
