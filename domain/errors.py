class DomainError(Exception):
    code = "E_DOMAIN"
    status_code = 500
    default_message = "Request failed"

    def __init__(self, message: str = "", *, detail: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        # extra context; only shown to callers in verbose mode unless the subclass says otherwise
        self.detail = detail


class InvalidInputError(DomainError):
    code = "E_INVALID_INPUT"
    status_code = 400
    default_message = "Invalid input"


class MissingImageError(InvalidInputError):
    code = "E_MISSING_IMAGE"
    default_message = "Image data is required"


class MissingPromptError(InvalidInputError):
    code = "E_MISSING_PROMPT"
    default_message = "Prompt is required"


class AIUnavailableError(DomainError):
    code = "E_AI_UNAVAILABLE"
    default_message = "AI Vision is unavailable"


class ModelUnavailableError(AIUnavailableError):
    code = "E_MODEL_UNAVAILABLE"
    default_message = (
        "OpenAI API key not configured. Please add OPENAI_API_KEY to your environment variables."
    )


class ModelMisconfiguredError(AIUnavailableError):
    code = "E_MODEL_MISCONFIGURED"
    default_message = "OpenAI client not initialized properly."


class UpstreamError(DomainError):
    """Failure reported by the vision provider. Never retried here."""

    code = "E_UPSTREAM"
    default_message = "AI Vision analysis failed"
    public_detail = False


class QuotaExceededError(UpstreamError):
    code = "E_QUOTA_EXCEEDED"
    status_code = 402
    default_message = (
        "OpenAI API quota exceeded. Please check your billing and add credits to your OpenAI account."
    )


class InvalidCredentialError(UpstreamError):
    code = "E_INVALID_CREDENTIAL"
    status_code = 401
    default_message = "Invalid OpenAI API key. Please check your OPENAI_API_KEY in environment variables."


class RateLimitedError(UpstreamError):
    code = "E_RATE_LIMITED"
    status_code = 429
    default_message = "OpenAI API rate limit exceeded. Please wait and try again."


class ModelDeprecatedError(UpstreamError):
    code = "E_MODEL_DEPRECATED"
    default_message = "AI Vision model has been updated. Please contact support if this error persists."
    public_detail = True


class UpstreamFailureError(UpstreamError):
    pass
