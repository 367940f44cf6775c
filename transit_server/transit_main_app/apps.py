from django.apps import AppConfig


class TransitMainAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'transit_main_app'
    verbose_name = 'Transit back-office'
