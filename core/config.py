from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # AI provider
    openai_api_key: str | None = Field(None, alias="OPENAI_API_KEY")
    openai_vision_model: str = Field("gpt-4o", alias="OPENAI_VISION_MODEL")

    # Set by the Lambda runtime; its presence marks a hosted deployment
    aws_lambda_function_name: str | None = Field(None, alias="AWS_LAMBDA_FUNCTION_NAME")

    # CORS / Web
    allowed_origins: str = Field("*", alias="ALLOWED_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_hosted(self) -> bool:
        return bool(self.aws_lambda_function_name)

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def verbose(self) -> bool:
        # raw replies and upstream error details are only echoed on a local dev box
        return not self.is_production and not self.is_hosted

    @property
    def environment_label(self) -> str:
        return "AWS Lambda" if self.is_hosted else self.app_env

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


settings = Settings()
