from dotenv import load_dotenv

from infrastructure.i18n import Localization, setup_localization
from infrastructure.lifecycle import LoadingPhase, Resources
from infrastructure.logging import configure_logging, get_module_logger
from infrastructure.services import get_settings

logger = get_module_logger()

load_dotenv()


def greeting_system(resources: Resources, name: str = "Ada") -> str:
    """Greet in the active language and list the loaded languages."""
    localization = resources.require(Localization)

    greeting = localization.localize_with_args("greeting", {"name": name})
    logger.info("greeting", text=greeting)

    for tag, display_name in localization.available_languages():
        logger.info("language_available", language=str(tag), display_name=display_name)

    return greeting


def main() -> Resources:
    """Run the loading phase, then the main-state systems."""
    settings = get_settings()
    configure_logging(log_level=settings.LOG_LEVEL, is_production=settings.is_production)
    logger.info("application_startup", git_sha=settings.GIT_SHA)

    resources = Resources()
    phase = LoadingPhase(resources)

    setup_localization(phase, settings.localization)
    phase.complete()

    greeting_system(resources)
    return resources


if __name__ == "__main__":
    main()
