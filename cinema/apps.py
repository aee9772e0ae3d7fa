from django.apps import AppConfig


class CinemaConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cinema"

    def ready(self) -> None:
        from django.conf import settings

        from cinema.log import configure_logging

        configure_logging(
            level=settings.CINEMA_LOG_LEVEL,
            serialize=settings.CINEMA_LOG_JSON,
        )
