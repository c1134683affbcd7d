from decouple import config

# --- Server ---
DEBUG = config("HUFFMAN_DEBUG", default=False, cast=bool)
HOST = config("HUFFMAN_HOST", default="0.0.0.0")
PORT = config("HUFFMAN_PORT", default=5000, cast=int)

# --- Cross-origin ---
CORS_ORIGINS = config("HUFFMAN_CORS_ORIGINS", default="*")

# --- Logging ---
LOG_LEVEL = config("HUFFMAN_LOG_LEVEL", default="INFO")

# --- Limits ---
MAX_TEXT_LENGTH = config("HUFFMAN_MAX_TEXT_LENGTH", default=1_000_000, cast=int)
# 0 derives the limit from MAX_TEXT_LENGTH
MAX_ENCODED_LENGTH = config("HUFFMAN_MAX_ENCODED_LENGTH", default=0, cast=int)
