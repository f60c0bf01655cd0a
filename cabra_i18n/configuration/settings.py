"""cabra-i18n configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from cabra_i18n.configuration.sections import (
    FontSettings,
    LocaleSettings,
    StorageSettings,
    TranslationSettings,
)


class Settings(BaseSettings):
    """Main settings object aggregating every section.

    Environment Variables:
        ENVIRONMENT: Deployment environment (development, production)
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from cabra_i18n.configuration import settings

        fallback = settings.locale.fallback_locale
        ttl = settings.translations.cache_expiration_seconds

        if settings.is_production:
            # JSON logs, file storage...
        ```
    """

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    locale: LocaleSettings
    translations: TranslationSettings
    fonts: FontSettings
    storage: StorageSettings

    @property
    def is_production(self) -> bool:
        """Check if the toolkit is running in production.

        Returns:
            True if ENVIRONMENT is "production", False otherwise.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self, **kwargs):
        """Initialize Settings with automatic section instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "locale": LocaleSettings,
            "translations": TranslationSettings,
            "fonts": FontSettings,
            "storage": StorageSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
