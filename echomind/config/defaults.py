"""echomind.config.defaults
========================

Small, stable default values used by the registry, the codecs, the
configuration loader and the CLI. Plain constants only; this module imports
nothing from the rest of the package so any layer may depend on it.
"""

from __future__ import annotations

# ---- Configuration defaults ----
DEFAULT_PROVIDER = "chat"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_TEMPERATURE = 0.7

CONFIG_FILE_ENV = "ECHOMIND_CONFIG_FILE"
CONFIG_DIR_NAME = "echomind"
CONFIG_FILE_NAME = "config.yaml"


# ---- Provider endpoints ----
CHAT_ENDPOINT = "https://ch.at/v1/chat/completions"
CHATANYWHERE_ENDPOINT = "https://api.chatanywhere.tech/v1/chat/completions"
OPENAI_ENDPOINT = "https://api.openai.com/v1/chat/completions"
ANTHROPIC_ENDPOINT = "https://api.anthropic.com/v1/messages"
OLLAMA_ENDPOINT = "http://localhost:11434/api/chat"
XAI_ENDPOINT = "https://api.x.ai/v1/chat/completions"
MISTRAL_ENDPOINT = "https://api.mistral.ai/v1/chat/completions"
COHERE_ENDPOINT = "https://api.cohere.ai/v1/chat"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_ENDPOINT = GEMINI_BASE_URL + "/models/{model}:generateContent"
GEMINI_MODELS_ENDPOINT = GEMINI_BASE_URL + "/models"


# ---- Per-schema default models ----
OPENAI_STYLE_DEFAULT_MODEL = "gpt-3.5-turbo"
COHERE_DEFAULT_MODEL = "command"
GEMINI_DEFAULT_MODEL = "gemini-pro"
ANTHROPIC_DEFAULT_MODEL = "claude-3-5-sonnet-latest"
OLLAMA_DEFAULT_MODEL = "llama3"

# Anthropic requires max_tokens on every request.
ANTHROPIC_DEFAULT_MAX_TOKENS = 1024
ANTHROPIC_VERSION = "2023-06-01"

# Cohere fills temperature when the caller leaves it unset.
COHERE_DEFAULT_TEMPERATURE = 0.7


# ---- Model comparison ----
COMPARE_MAX_WORKERS = 4
