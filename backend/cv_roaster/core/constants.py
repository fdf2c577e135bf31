"""Centralized constants — no magic numbers in service code."""

# Service
SERVICE_NAME = "cv-roaster"
SERVICE_VERSION = "1.0.0"

# Upload limits
MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5 MB
MULTIPART_OVERHEAD_ALLOWANCE = 64 * 1024  # boundary + part headers
PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TXT_MIME = "text/plain"

# Content limits
DEFAULT_MIN_CONTENT_LENGTH = 50  # chars after trimming
DEFAULT_MAX_CONTENT_LENGTH = 10_000  # chars sent to the LLM
TRUNCATION_MARKER = "\n\n[Content truncated...]"

# LinkedIn
LINKEDIN_PROFILE_MARKER = "linkedin.com/in/"

# LLM
ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
LLM_MAX_TOKENS = 1500
LLM_TIMEOUT_SECONDS = 30

# Rate limiting
RATE_LIMIT_MAX_REQUESTS = 10
RATE_LIMIT_WINDOW_MINUTES = 15
RATE_LIMIT_SCOPE = "roast"
