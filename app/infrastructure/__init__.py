"""Infrastructure modules for the localization engine.

Centralized infrastructure components:
- configuration: Settings management (Settings, LocalizationSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- services: Singleton providers (get_settings)
- lifecycle: Host-side resource container and loading phase
- i18n: Catalog parsing, language bundles and the localization registry
"""
