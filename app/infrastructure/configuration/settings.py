"""Top-level settings object for the localization engine."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.infrastructure import LocalizationSettings


class Settings(BaseSettings):
    """Aggregates process-wide values and the per-domain settings sections.

    Environment Variables:
        PREFIX: Deployment prefix; empty in production
        LOG_LEVEL: Root log level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Build identifier logged at startup

    Sections are built from the environment unless passed in explicitly,
    which is how tests inject a ``LocalizationSettings`` pointing at a
    temporary locales directory:

        settings = Settings(localization=LocalizationSettings(I18N_LOCALES_DIR=tmp))
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    localization: LocalizationSettings

    @property
    def is_production(self) -> bool:
        return not self.PREFIX

    def __init__(self, **kwargs):
        sections = {"localization": LocalizationSettings}
        for name, section_class in sections.items():
            if name not in kwargs:
                kwargs[name] = section_class()
        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
