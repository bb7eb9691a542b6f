"""ilmigreen.config.defaults
========================

Small, stable default values for the client library and CLI. Everything here
can be overridden through environment variables or the optional external
config file (see :mod:`ilmigreen.config`).

This module performs no I/O and imports nothing from the rest of the package
so it can be used from any layer without circular imports.
"""

from __future__ import annotations

# ---- Service endpoints ----
# Base URL of the functions host. Empty means "must be configured".
SERVICE_DEFAULT_BASE_URL = ""
SERVICE_CHAT_PATH = "/functions/v1/chat"
SERVICE_DETECT_PATH = "/functions/v1/detect-waste"


# ---- Streaming ----
# Line terminator scanned for by the frame decoder.
STREAM_LINE_TERMINATOR = "\n"
# Prefix of a data record, including the single space.
STREAM_DATA_PREFIX = "data: "
# Payload marking the end of the stream.
STREAM_DONE_SENTINEL = "[DONE]"
# Upper bound for text held in the pending buffer of one stream (characters).
STREAM_MAX_PENDING_CHARS = 1024 * 1024


# ---- Conversation ----
# Opening assistant message shown before the user says anything.
CHAT_DEFAULT_GREETING = (
    "Halo! 👋 Saya IlmiGreen Assistant. Ada yang bisa saya bantu tentang "
    "pengelolaan sampah dan lingkungan?"
)


# ---- CLI ----
CLI_PROG_NAME = "ilmigreen"


# ---- Detection ----
# Largest image file accepted for upload (bytes).
DETECT_MAX_IMAGE_BYTES = 5 * 1024 * 1024
# Image types accepted for upload.
DETECT_IMAGE_MIME_TYPES = ("image/png", "image/jpeg")
