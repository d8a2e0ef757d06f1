from enum import Enum
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings


class AIProvider(str, Enum):
    OPENAI = "openai"
    AZURE_OPENAI = "azure-openai"
    ANTHROPIC = "anthropic"


class ProviderConfig(BaseModel):
    """Connection settings for one provider. Read-only once built."""

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    base_url: str = ""
    api_version: str = ""  # Azure only

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


class GatewayConfig(BaseModel):
    """Everything the gateway needs, captured once at startup."""

    model_config = ConfigDict(frozen=True)

    default_provider: AIProvider = AIProvider.ANTHROPIC
    openai: ProviderConfig = ProviderConfig(base_url="https://api.openai.com/v1")
    azure_openai: ProviderConfig = ProviderConfig(api_version="2024-02-15-preview")
    anthropic: ProviderConfig = ProviderConfig(base_url="https://api.anthropic.com")
    request_timeout: float = 120.0

    def for_provider(self, provider: AIProvider) -> ProviderConfig:
        return {
            AIProvider.OPENAI: self.openai,
            AIProvider.AZURE_OPENAI: self.azure_openai,
            AIProvider.ANTHROPIC: self.anthropic,
        }[provider]


class Settings(BaseSettings):
    # Provider selection
    default_ai_provider: AIProvider = AIProvider.ANTHROPIC

    # OpenAI
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"

    # Azure OpenAI
    azure_openai_api_key: str = ""
    azure_openai_base_url: str = ""
    azure_openai_api_version: str = "2024-02-15-preview"

    # Anthropic
    anthropic_api_key: str = ""
    anthropic_base_url: str = "https://api.anthropic.com"

    # Transport timeout for a single provider call, in seconds
    ai_request_timeout: float = 120.0

    class Config:
        env_file = ".env"
        case_sensitive = False

    @field_validator("default_ai_provider", mode="before")
    @classmethod
    def _fallback_provider(cls, value):
        if isinstance(value, AIProvider):
            return value
        value = (value or "").strip().lower()
        if not value:
            return AIProvider.ANTHROPIC
        try:
            return AIProvider(value)
        except ValueError:
            # Unrecognised selectors fall back to Azure
            return AIProvider.AZURE_OPENAI

    def gateway_config(self) -> GatewayConfig:
        return GatewayConfig(
            default_provider=self.default_ai_provider,
            openai=ProviderConfig(
                api_key=self.openai_api_key,
                base_url=self.openai_base_url,
            ),
            azure_openai=ProviderConfig(
                api_key=self.azure_openai_api_key,
                base_url=self.azure_openai_base_url,
                api_version=self.azure_openai_api_version,
            ),
            anthropic=ProviderConfig(
                api_key=self.anthropic_api_key,
                base_url=self.anthropic_base_url,
            ),
            request_timeout=self.ai_request_timeout,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
